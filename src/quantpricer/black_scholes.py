# black_scholes.py
# Closed-form Black-Scholes price and Greeks for European vanillas.
# Inputs are expected to be clamped OptionSpec instances (see core.py).

from __future__ import annotations
import math
from scipy.special import erfc

from .core import OptionSpec, Greeks

__all__ = ["price", "greeks", "norm_cdf", "norm_pdf"]

_SQRT_2 = math.sqrt(2.0)
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def norm_pdf(x: float) -> float:
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)


def norm_cdf(x: float) -> float:
    """Standard normal CDF via erfc, accurate deep in both tails."""
    return 0.5 * float(erfc(-x / _SQRT_2))


def _d1_d2(opt: OptionSpec):
    sig_sqrt_T = opt.volatility * math.sqrt(opt.time_to_maturity)
    d1 = (math.log(opt.spot / opt.strike)
          + (opt.rate - opt.dividend_yield + 0.5 * opt.volatility ** 2) * opt.time_to_maturity
          ) / sig_sqrt_T
    d2 = d1 - sig_sqrt_T
    return d1, d2


def greeks(opt: OptionSpec) -> Greeks:
    S, K, T = opt.spot, opt.strike, opt.time_to_maturity
    r, q, sigma = opt.rate, opt.dividend_yield, opt.volatility

    d1, d2 = _d1_d2(opt)
    sqrt_T = math.sqrt(T)
    disc_r = math.exp(-r * T)
    disc_q = math.exp(-q * T)
    n_d1 = norm_pdf(d1)

    # Common
    gamma = disc_q * n_d1 / (S * sigma * sqrt_T)
    vega  = S * disc_q * n_d1 * sqrt_T
    decay = -S * disc_q * n_d1 * sigma / (2.0 * sqrt_T)

    if opt.is_call:
        N_d1, N_d2 = norm_cdf(d1), norm_cdf(d2)
        px    = disc_q * S * N_d1 - disc_r * K * N_d2
        delta = disc_q * N_d1
        theta = decay - r * K * disc_r * N_d2 + q * S * disc_q * N_d1
        rho   = K * T * disc_r * N_d2
    else:
        N_md1, N_md2 = norm_cdf(-d1), norm_cdf(-d2)
        px    = disc_r * K * N_md2 - disc_q * S * N_md1
        delta = disc_q * (norm_cdf(d1) - 1.0)
        theta = decay + r * K * disc_r * N_md2 - q * S * disc_q * N_md1
        rho   = -K * T * disc_r * N_md2

    return Greeks(price=px, delta=delta, gamma=gamma, vega=vega, theta=theta, rho=rho)


def price(opt: OptionSpec) -> float:
    d1, d2 = _d1_d2(opt)
    disc_r = math.exp(-opt.rate * opt.time_to_maturity)
    disc_q = math.exp(-opt.dividend_yield * opt.time_to_maturity)
    if opt.is_call:
        return disc_q * opt.spot * norm_cdf(d1) - disc_r * opt.strike * norm_cdf(d2)
    return disc_r * opt.strike * norm_cdf(-d2) - disc_q * opt.spot * norm_cdf(-d1)
