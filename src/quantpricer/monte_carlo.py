# quantpricer/monte_carlo.py

from __future__ import annotations
import logging
import math
import numpy as np
from concurrent.futures import ThreadPoolExecutor

from .core import OptionSpec, MonteCarloResult

__all__ = ["mc_price"]

logger = logging.getLogger(__name__)


# ---- helper: one simulation block (no path storage, only terminal S_T) ----

def _block_stats(n: int, opt: OptionSpec, seed) -> tuple[int, float, float]:
    """
    Simulate `n` terminal draws of S_T under risk-neutral GBM and return the
    undiscounted payoff statistics needed for aggregation:
        (count, mean, M2)   with M2 = sum of squared deviations from the mean
    """
    if n <= 0:
        return (0, 0.0, 0.0)

    # generator is private to this block
    rng = np.random.default_rng(seed)
    sigma, T = opt.volatility, opt.time_to_maturity
    drift = (opt.rate - opt.dividend_yield - 0.5 * sigma * sigma) * T
    diffusion = sigma * math.sqrt(T)

    Z = rng.standard_normal(n)
    ST = opt.spot * np.exp(drift + diffusion * Z)

    if opt.is_call:
        payoff = np.maximum(ST - opt.strike, 0.0)
    else:
        payoff = np.maximum(opt.strike - ST, 0.0)

    mean = float(payoff.mean())
    m2 = float(np.square(payoff - mean).sum())
    return (n, mean, m2)


def _merge_stats(stats_list):
    """Combine block statistics in list order (pairwise mean/M2 update)."""
    n, mean, m2 = 0, 0.0, 0.0
    for n_b, mean_b, m2_b in stats_list:
        if n_b == 0:
            continue
        total = n + n_b
        delta = mean_b - mean
        mean += delta * n_b / total
        m2 += m2_b + delta * delta * n * n_b / total
        n = total
    return n, mean, m2


def _plan_blocks(paths: int, chunk_size: int) -> list[int]:
    blocks = []
    remaining = paths
    while remaining > 0:
        m = min(chunk_size, remaining)
        blocks.append(m)
        remaining -= m
    return blocks


def mc_price(
    opt: OptionSpec,
    paths: int,
    seed: int,
    *,
    chunk_size: int | None = None,
    n_workers: int = 1,
) -> MonteCarloResult:
    """
    European vanilla Monte Carlo pricer (terminal-only, plain estimator).
    Returns MonteCarloResult(price, standard_error).

    - paths == 0 gives price 0 and standard error 0.
    - Standard error uses the population variance of payoffs (divisor = paths),
      discounted like the price.
    - With chunk_size=None all paths come from one generator seeded with
      `seed`.  With a chunk_size, paths are split into contiguous blocks, each
      seeded from SeedSequence(seed).spawn(...), optionally run on n_workers
      threads, and merged in block order, so the result does not depend on
      n_workers.
    """
    paths = int(paths)
    if paths < 0:
        raise ValueError(f"paths must be non-negative, got {paths}")
    if seed < 0:
        raise ValueError(f"seed must be non-negative, got {seed}")
    if paths == 0:
        return MonteCarloResult(price=0.0, standard_error=0.0, paths=0, seed=seed)

    if chunk_size is None:
        stats_list = [_block_stats(paths, opt, seed)]
    else:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        blocks = _plan_blocks(paths, chunk_size)
        child_seeds = np.random.SeedSequence(seed).spawn(len(blocks))
        if n_workers <= 1:
            stats_list = [_block_stats(m, opt, ss) for m, ss in zip(blocks, child_seeds)]
        else:
            # map() yields in submission order, keeping the reduction deterministic
            with ThreadPoolExecutor(max_workers=n_workers) as ex:
                stats_list = list(ex.map(lambda a: _block_stats(a[0], opt, a[1]),
                                         zip(blocks, child_seeds)))
        logger.debug("mc: %d paths in %d blocks, %d workers",
                     paths, len(blocks), n_workers)

    n, mean_payoff, m2 = _merge_stats(stats_list)
    discount = math.exp(-opt.rate * opt.time_to_maturity)
    variance = max(0.0, m2 / n)
    standard_error = math.sqrt(variance) / math.sqrt(n)

    return MonteCarloResult(
        price=discount * mean_payoff,
        standard_error=discount * standard_error,
        paths=paths,
        seed=seed,
    )
