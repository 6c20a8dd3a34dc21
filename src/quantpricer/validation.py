"""Model validation: Monte Carlo against the closed form.

The simulator is an independent implementation of the same payoff, so its
estimate should sit within a few standard errors of the analytic price and
its standard error should decay like ``paths ** -0.5``.
"""

from __future__ import annotations

import numpy as np

from .core import OptionSpec
from .black_scholes import price as bs_price
from .monte_carlo import mc_price

__all__ = [
    "cross_validate",
    "convergence_analysis",
]


# ---------------------------------------------------------------------------
# Analytic vs simulation
# ---------------------------------------------------------------------------

def cross_validate(
    opt: OptionSpec,
    *,
    paths: int = 100_000,
    seed: int = 42,
) -> dict:
    """Price ``opt`` both ways and report the discrepancy.

    Returns
    -------
    dict
        ``"analytic"``, ``"mc"``, ``"standard_error"``, ``"abs_error"``,
        ``"rel_error"`` (vs analytic, ``nan`` if the analytic price is 0) and
        ``"z_score"`` (error in standard errors, ``nan`` if SE is 0).
    """
    ref = bs_price(opt)
    mc = mc_price(opt, paths, seed)
    abs_error = abs(mc.price - ref)
    return {
        "analytic": ref,
        "mc": mc.price,
        "standard_error": mc.standard_error,
        "abs_error": abs_error,
        "rel_error": abs_error / ref if ref > 0 else float("nan"),
        "z_score": abs_error / mc.standard_error if mc.standard_error > 0 else float("nan"),
    }


# ---------------------------------------------------------------------------
# Convergence in path count
# ---------------------------------------------------------------------------

def convergence_analysis(
    opt: OptionSpec,
    path_counts: list[int] | np.ndarray,
    *,
    seed: int = 42,
) -> dict:
    """Run the simulator at each path count and fit the SE decay rate.

    Returns
    -------
    dict
        ``"paths"``, ``"price"``, ``"standard_error"``, ``"abs_error"``
        (arrays) and ``"order"``: slope of log(SE) against log(paths),
        close to -0.5 for a healthy estimator.
    """
    path_counts = np.asarray(path_counts, dtype=int)
    if path_counts.size < 2 or np.any(path_counts <= 0):
        raise ValueError("need at least two positive path counts")

    ref = bs_price(opt)
    prices = np.empty(path_counts.size)
    errors = np.empty(path_counts.size)
    for i, n in enumerate(path_counts):
        res = mc_price(opt, int(n), seed)
        prices[i] = res.price
        errors[i] = res.standard_error

    valid = errors > 0
    if np.count_nonzero(valid) >= 2:
        order = float(np.polyfit(np.log(path_counts[valid]), np.log(errors[valid]), 1)[0])
    else:
        order = float("nan")

    return {
        "paths": path_counts,
        "price": prices,
        "standard_error": errors,
        "abs_error": np.abs(prices - ref),
        "order": order,
    }
