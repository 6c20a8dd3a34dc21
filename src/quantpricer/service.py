"""Request adapter in front of the pricing core.

Takes request mappings shaped like the pricing service messages::

    {"option": {"spot": 100, "strike": 100, "rate": 0.01, "volatility": 0.2,
                "time_to_maturity": 1.0, "dividend": 0.0, "is_call": True},
     "target_price": 8.43}

sanitises the option, calls exactly one core operation and returns a plain
response dict.  No pricing logic lives here.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Mapping, Optional

from .config import ServiceConfig
from .core import EPSILON, OptionSpec
from .black_scholes import greeks as bs_greeks, price as bs_price
from .implied_volatility import implied_vol
from .monte_carlo import mc_price

__all__ = ["InvalidArgumentError", "QuantService", "option_from_request", "sanitize_option"]

logger = logging.getLogger(__name__)

# wire name -> OptionSpec field
_OPTION_FIELDS = {
    "spot": "spot",
    "strike": "strike",
    "rate": "rate",
    "volatility": "volatility",
    "time_to_maturity": "time_to_maturity",
    "dividend": "dividend_yield",
}


class InvalidArgumentError(ValueError):
    """Malformed or missing request payload."""

    code = "INVALID_ARGUMENT"


def _number(value: Any, name: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")
    return float(value)


def _flag(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a boolean, got {value!r}")
    return value


def _count(value: Any, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
    return int(value)


def _require_mapping(request: Any, name: str = "request") -> Mapping:
    if request is None:
        raise InvalidArgumentError(f"{name} must not be null")
    if not isinstance(request, Mapping):
        raise InvalidArgumentError(f"{name} must be a mapping, got {type(request).__name__}")
    return request


def sanitize_option(raw: Mapping[str, float], epsilon: float = EPSILON) -> dict[str, float]:
    """Floor spot, strike, volatility and maturity at ``epsilon``."""
    if epsilon < EPSILON:
        raise ValueError(f"epsilon must be at least {EPSILON}, got {epsilon}")
    clean = dict(raw)
    for name in ("spot", "strike", "volatility", "time_to_maturity"):
        clean[name] = max(clean[name], epsilon)
    return clean


def option_from_request(request: Mapping, epsilon: float = EPSILON) -> OptionSpec:
    """Build a sanitised ``OptionSpec`` from ``request["option"]``.

    Absent numeric fields read as 0 and absent ``is_call`` as False, the
    same defaults an empty wire message carries.
    """
    option = _require_mapping(request.get("option"), "option")
    raw = {field: _number(option.get(wire), wire) for wire, field in _OPTION_FIELDS.items()}
    clean = sanitize_option(raw, epsilon)
    return OptionSpec(is_call=_flag(option.get("is_call"), "is_call"), **clean)


class QuantService:
    """Four pricing operations over request/response mappings."""

    def __init__(self, config: Optional[ServiceConfig] = None):
        self.config = config or ServiceConfig()

    def _option(self, request: Any) -> OptionSpec:
        request = _require_mapping(request)
        return option_from_request(request, self.config.epsilon)

    def price(self, request: Mapping) -> dict:
        opt = self._option(request)
        return {"price": bs_price(opt)}

    def greeks(self, request: Mapping) -> dict:
        opt = self._option(request)
        return bs_greeks(opt).as_dict()

    def implied_vol(self, request: Mapping) -> dict:
        opt = self._option(request)
        if request.get("target_price") is None:
            raise InvalidArgumentError("target_price is required")
        target = _number(request["target_price"], "target_price")
        cfg = self.config

        def setting(name, default, cast):
            value = request.get(name)
            return default if value is None else cast(value, name)

        result = implied_vol(
            opt,
            target,
            lower_bound=setting("lower_bound", cfg.iv_lower_bound, _number),
            upper_bound=setting("upper_bound", cfg.iv_upper_bound, _number),
            tol=setting("tolerance", cfg.iv_tolerance, _number),
            max_iterations=setting("max_iterations", cfg.iv_max_iterations, _count),
        )
        if not result.converged:
            logger.info("implied vol not converged for target %.6f", target)
        return result.as_dict()

    def monte_carlo(self, request: Mapping) -> dict:
        opt = self._option(request)
        paths = _count(request.get("paths"), "paths") or self.config.default_paths
        seed = _count(request.get("seed"), "seed")
        logger.debug("monte carlo request: paths=%d seed=%d", paths, seed)
        return mc_price(opt, paths, seed).as_dict()
