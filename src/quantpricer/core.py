from __future__ import annotations
from dataclasses import dataclass, replace

EPSILON = 1e-6    # floor for spot, strike, vol and maturity

CALL = "call"
PUT  = "put"


# ---------------------------------------------------------------------------
# Contract description
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OptionSpec:
    """One European option contract plus the market inputs to value it.

    Parameters
    ----------
    spot : float
        Current underlying price.
    strike : float
        Strike price.
    rate : float
        Continuously-compounded risk-free rate (may be negative).
    volatility : float
        Black-Scholes volatility, annualised.
    time_to_maturity : float
        Time to expiry in years.
    dividend_yield : float
        Continuous dividend / carry yield (default 0).
    is_call : bool
        ``True`` for a call, ``False`` for a put.

    Spot, strike, volatility and maturity are floored at ``EPSILON`` on
    construction, so every instance handed to a pricer is already clamped.
    """
    spot: float
    strike: float
    rate: float
    volatility: float
    time_to_maturity: float
    dividend_yield: float = 0.0
    is_call: bool = True

    def __post_init__(self):
        for name in ("spot", "strike", "volatility", "time_to_maturity"):
            object.__setattr__(self, name, max(float(getattr(self, name)), EPSILON))
        object.__setattr__(self, "rate", float(self.rate))
        object.__setattr__(self, "dividend_yield", float(self.dividend_yield))
        object.__setattr__(self, "is_call", bool(self.is_call))

    @classmethod
    def from_kind(
        cls, spot: float, strike: float, rate: float, volatility: float,
        time_to_maturity: float, dividend_yield: float = 0.0, kind: str = CALL,
    ) -> OptionSpec:
        """Build an OptionSpec from a ``"call"`` / ``"put"`` string."""
        kind = kind.lower()
        if kind not in (CALL, PUT):
            raise ValueError(f"kind must be 'call' or 'put', got {kind!r}")
        return cls(spot, strike, rate, volatility, time_to_maturity,
                   dividend_yield, is_call=(kind == CALL))

    @property
    def kind(self) -> str:
        return CALL if self.is_call else PUT

    def with_volatility(self, volatility: float) -> OptionSpec:
        """Copy of this contract with ``volatility`` overridden."""
        return replace(self, volatility=volatility)


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Greeks:
    """Black-Scholes price and first/second order sensitivities.

    Vega is dPrice/dSigma (absolute), theta is dPrice/dt per year.
    """
    price: float
    delta: float
    gamma: float
    vega: float
    theta: float
    rho: float

    def as_dict(self) -> dict[str, float]:
        return {
            "price": self.price, "delta": self.delta, "gamma": self.gamma,
            "vega": self.vega, "theta": self.theta, "rho": self.rho,
        }


@dataclass(frozen=True)
class ImpliedVolatilityResult:
    implied_volatility: float
    converged: bool
    iterations: int

    def as_dict(self) -> dict:
        return {
            "implied_volatility": self.implied_volatility,
            "converged": self.converged,
            "iterations": self.iterations,
        }


@dataclass(frozen=True)
class MonteCarloResult:
    price: float
    standard_error: float
    paths: int = 0
    seed: int = 0

    def as_dict(self) -> dict[str, float]:
        return {"price": self.price, "standard_error": self.standard_error}
