"""Service defaults, overridable from the environment.

Every field of :class:`ServiceConfig` can be set through a
``QUANTPRICER_<FIELD>`` variable, e.g. ``QUANTPRICER_DEFAULT_PATHS=50000``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .core import EPSILON

ENV_PREFIX = "QUANTPRICER_"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ServiceConfig:
    epsilon: float = 1e-6
    default_paths: int = 10_000
    iv_lower_bound: float = 1e-6
    iv_upper_bound: float = 5.0
    iv_tolerance: float = 1e-6
    iv_max_iterations: int = 100
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.epsilon < EPSILON:
            raise ValueError(f"epsilon must be at least {EPSILON}, got {self.epsilon}")
        if self.default_paths <= 0:
            raise ValueError(f"default_paths must be positive, got {self.default_paths}")
        if not (0 < self.iv_lower_bound < self.iv_upper_bound):
            raise ValueError(
                f"need 0 < iv_lower_bound < iv_upper_bound, got "
                f"[{self.iv_lower_bound}, {self.iv_upper_bound}]"
            )
        if str(self.log_level).upper() not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
        """Build a config from ``QUANTPRICER_*`` variables, defaults elsewhere."""
        environ = os.environ if environ is None else environ
        kwargs = {}
        for f in fields(cls):
            var = ENV_PREFIX + f.name.upper()
            raw = environ.get(var)
            if raw is None or raw.strip() == "":
                continue
            cast = {"float": float, "int": int}.get(f.type, str)
            try:
                kwargs[f.name] = cast(raw.strip())
            except ValueError:
                raise ValueError(f"{var}={raw!r} is not a valid {f.type}") from None
        if "log_level" in kwargs:
            kwargs["log_level"] = kwargs["log_level"].upper()
        return cls(**kwargs)
