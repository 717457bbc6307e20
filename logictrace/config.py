"""
Configuration for the LogicTrace engine and batch driver.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from .analyzer.policies import StepPolicy, get_policy
from .analyzer.valuation import Valuation, parse_truth_value

ENV_STEP_MODE = "LOGICTRACE_STEP_MODE"
ENV_APPLY_LAWS = "LOGICTRACE_APPLY_LAWS"
ENV_DISTRIBUTE = "LOGICTRACE_DISTRIBUTE"
ENV_COMMUTE = "LOGICTRACE_COMMUTE"


class StepMode(Enum):
    """Step vocabularies; values are policy names"""
    DESCRIBE = "describe"
    TRUTH = "truth"


@dataclass
class EngineConfiguration:
    """Configuration parameters for a single evaluation"""

    # Step wording
    step_mode: StepMode = StepMode.DESCRIBE
    valuation: Optional[Valuation] = None

    # Law rewriting
    apply_laws: bool = False
    distribute: bool = False
    commute: bool = False

    def __post_init__(self):
        if isinstance(self.step_mode, str):
            self.step_mode = StepMode(self.step_mode)
        if (self.distribute or self.commute) and not self.apply_laws:
            raise ValueError("distribute and commute require apply_laws")

    def make_policy(self) -> StepPolicy:
        return get_policy(self.step_mode.value)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EngineConfiguration':
        """
        Build a configuration from LOGICTRACE_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable holds an unrecognised value
        """
        environ = os.environ if environ is None else environ
        config = cls()

        if environ.get(ENV_STEP_MODE):
            config.step_mode = StepMode(environ[ENV_STEP_MODE].strip().lower())
        if environ.get(ENV_APPLY_LAWS):
            config.apply_laws = parse_truth_value(environ[ENV_APPLY_LAWS])
        if environ.get(ENV_DISTRIBUTE):
            config.distribute = parse_truth_value(environ[ENV_DISTRIBUTE])
        if environ.get(ENV_COMMUTE):
            config.commute = parse_truth_value(environ[ENV_COMMUTE])

        # Distribution and commutation are laws, so asking for either turns laws on
        config.apply_laws = config.apply_laws or config.distribute or config.commute

        return config


@dataclass
class BatchConfiguration:
    """Configuration parameters for the batch driver"""

    # Output layout
    indent: str = "  "
    expression_prefix: str = "Expression: "

    # Parallelism; 1 evaluates lines in order on the calling thread
    jobs: int = 1

    engine: EngineConfiguration = field(default_factory=EngineConfiguration)

    def __post_init__(self):
        if self.jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {self.jobs}")
