# quantpricer: Black-Scholes pricing, implied vol and Monte Carlo cross-check
# Public API

from .core import (
    OptionSpec, CALL, PUT, EPSILON,
    Greeks, ImpliedVolatilityResult, MonteCarloResult,
)
from .black_scholes import price as bs_price, greeks as bs_greeks
from .implied_volatility import implied_vol
from .monte_carlo import mc_price

# Validation
from .validation import cross_validate, convergence_analysis

# Request adapter & ambient stack
from .config import ServiceConfig
from .log import configure_logging
from .service import QuantService, InvalidArgumentError

__all__ = [
    "OptionSpec", "CALL", "PUT", "EPSILON",
    "Greeks", "ImpliedVolatilityResult", "MonteCarloResult",
    "bs_price", "bs_greeks", "implied_vol", "mc_price",
    "cross_validate", "convergence_analysis",
    "ServiceConfig", "configure_logging",
    "QuantService", "InvalidArgumentError",
]

__version__ = "0.1.0"
