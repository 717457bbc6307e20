"""
LogicTrace Optimizer Package

Tree-to-tree passes run before evaluation. Currently the logical-law
rewriting pass.
"""

from .laws import Law, LawRewriter, RewriteResult, LAW_REWRITES, rewrite

__all__ = [
    "Law", "LawRewriter", "RewriteResult", "LAW_REWRITES", "rewrite",
]
