"""Tests for the bisection implied-volatility solver."""

import logging
import pytest

from quantpricer.core import OptionSpec
from quantpricer.black_scholes import price
from quantpricer.implied_volatility import implied_vol

OPT = OptionSpec(spot=100, strike=100, rate=0.01, volatility=0.2, time_to_maturity=1.0)


class TestRoundTrip:
    def test_reference_call(self):
        res = implied_vol(OPT, price(OPT))
        assert res.converged
        assert res.implied_volatility == pytest.approx(0.2, abs=1e-4)
        assert 1 <= res.iterations <= 100

    @pytest.mark.parametrize("sigma", [0.05, 0.15, 0.4, 1.2])
    @pytest.mark.parametrize("is_call", [True, False])
    def test_various_vols(self, sigma, is_call):
        opt = OptionSpec(spot=95, strike=100, rate=0.02, volatility=sigma,
                         time_to_maturity=0.5, dividend_yield=0.01, is_call=is_call)
        res = implied_vol(opt, price(opt))
        assert res.converged
        assert res.implied_volatility == pytest.approx(sigma, abs=1e-4)

    def test_input_volatility_ignored(self):
        target = price(OPT)
        res = implied_vol(OPT.with_volatility(3.0), target)
        assert res.implied_volatility == pytest.approx(0.2, abs=1e-4)


class TestStoppingRules:
    def test_bracket_collapse_counts_as_converged(self):
        # every price in the bracket exceeds a negative target, so the
        # bracket collapses onto the lower bound without matching the price
        res = implied_vol(OPT, -1.0)
        assert res.converged
        assert res.implied_volatility < 1e-5
        assert abs(price(OPT.with_volatility(res.implied_volatility)) + 1.0) > 1e-6

    def test_iteration_cap_reports_not_converged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="quantpricer.implied_volatility"):
            res = implied_vol(OPT, price(OPT), max_iterations=5)
        assert not res.converged
        assert res.iterations == 5
        assert "did not converge" in caplog.text

    def test_iterations_at_least_one(self):
        res = implied_vol(OPT, price(OPT), max_iterations=0)
        assert res.iterations == 1

    def test_first_midpoint_hit(self):
        mid = 0.5 * (1e-6 + 5.0)
        res = implied_vol(OPT, price(OPT.with_volatility(mid)))
        assert res.converged
        assert res.iterations == 1
        assert res.implied_volatility == mid

    def test_custom_bracket(self):
        res = implied_vol(OPT, price(OPT), lower_bound=0.1, upper_bound=0.3, tol=1e-8)
        assert res.converged
        assert res.implied_volatility == pytest.approx(0.2, abs=1e-6)
