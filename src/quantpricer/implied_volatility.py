"""Implied volatility by bisection on the Black-Scholes price.

Relies on price being monotone increasing in sigma (positive vega) inside
the search bracket.  Non-convergence is reported through the result flag,
never raised.
"""

from __future__ import annotations

import logging

from .core import OptionSpec, ImpliedVolatilityResult
from .black_scholes import price as bs_price

__all__ = ["implied_vol"]

logger = logging.getLogger(__name__)


def implied_vol(
    opt: OptionSpec,
    target_price: float,
    *,
    lower_bound: float = 1e-6,
    upper_bound: float = 5.0,
    tol: float = 1e-6,
    max_iterations: int = 100,
) -> ImpliedVolatilityResult:
    """Find sigma such that ``bs_price(opt with sigma) == target_price``.

    Parameters
    ----------
    opt : OptionSpec
        Contract and market inputs; its volatility is ignored.
    target_price : float
        Observed option price.
    lower_bound, upper_bound : float
        Volatility search bracket.
    tol : float
        Stops when the price error or the bracket width drops below ``tol``.
    max_iterations : int
        Iteration cap; values below 1 are treated as 1.

    Returns
    -------
    ImpliedVolatilityResult
        Last midpoint, whether a stopping rule fired, and the number of
        iterations executed.

    Notes
    -----
    A collapsed bracket counts as converged even if the price error is still
    above ``tol``.  For targets the bracket cannot reach (e.g. below the
    intrinsic floor) this returns the nearest bound with ``converged=True``.
    """
    low, high = float(lower_bound), float(upper_bound)
    target_price = float(target_price)
    max_iterations = max(1, int(max_iterations))

    mid = 0.5 * (low + high)
    for iteration in range(1, max_iterations + 1):
        mid = 0.5 * (low + high)
        diff = bs_price(opt.with_volatility(mid)) - target_price

        if abs(diff) < tol:
            logger.debug("iv converged on price: sigma=%.10f iter=%d", mid, iteration)
            return ImpliedVolatilityResult(mid, True, iteration)

        if diff > 0.0:
            high = mid
        else:
            low = mid

        if abs(high - low) < tol:
            logger.debug(
                "iv bracket collapsed: sigma=%.10f residual=%.3e iter=%d",
                mid, diff, iteration,
            )
            return ImpliedVolatilityResult(mid, True, iteration)

    logger.warning(
        "iv did not converge in %d iterations (target=%.6f, last sigma=%.6f)",
        max_iterations, target_price, mid,
    )
    return ImpliedVolatilityResult(mid, False, max_iterations)
