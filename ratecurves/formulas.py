"""Closed-form option formulas and implied volatility inversion.

Prices are undiscounted option values multiplied by ``payoff_unit`` (a
discount factor or an annuity).
"""

import math

from scipy.optimize import brentq
from scipy.stats import norm


def bachelier_option_value(
    forward: float,
    volatility: float,
    option_maturity: float,
    strike: float,
    payoff_unit: float,
) -> float:
    """Call value under the Bachelier (normal) model.

    ``d = (F - K) / (sigma * sqrt(T))`` and the value is
    ``payoff_unit * sigma * sqrt(T) * (d * N(d) + n(d))``.
    """
    if option_maturity < 0:
        return 0.0
    volatility_on_horizon = volatility * math.sqrt(option_maturity)
    if volatility_on_horizon <= 0:
        return max(forward - strike, 0.0) * payoff_unit
    d = (forward - strike) / volatility_on_horizon
    return payoff_unit * volatility_on_horizon * (d * norm.cdf(d) + norm.pdf(d))


def black_option_value(
    forward: float,
    volatility: float,
    option_maturity: float,
    strike: float,
    payoff_unit: float,
) -> float:
    """Call value under the Black (lognormal) model."""
    if option_maturity < 0:
        return 0.0
    if forward <= 0 or strike <= 0:
        raise ValueError(
            f"Black model needs positive forward and strike (forward={forward}, strike={strike})"
        )
    volatility_on_horizon = volatility * math.sqrt(option_maturity)
    if volatility_on_horizon <= 0:
        return max(forward - strike, 0.0) * payoff_unit
    d_plus = (math.log(forward / strike) + 0.5 * volatility_on_horizon**2) / volatility_on_horizon
    d_minus = d_plus - volatility_on_horizon
    return payoff_unit * (forward * norm.cdf(d_plus) - strike * norm.cdf(d_minus))


def _implied_volatility(pricer, price: float, upper_bound: float) -> float:
    intrinsic = pricer(0.0)
    if price <= intrinsic:
        return 0.0
    while pricer(upper_bound) < price:
        upper_bound *= 2.0
        if upper_bound > 1e6:
            raise ValueError(f"Option price {price} exceeds any volatility's value")
    return brentq(lambda volatility: pricer(volatility) - price, 0.0, upper_bound, xtol=1e-14)


def bachelier_implied_volatility(
    forward: float,
    option_maturity: float,
    strike: float,
    payoff_unit: float,
    option_value: float,
) -> float:
    """Normal volatility reproducing a call value."""
    if option_maturity <= 0:
        return 0.0
    return _implied_volatility(
        lambda volatility: bachelier_option_value(
            forward, volatility, option_maturity, strike, payoff_unit
        ),
        option_value,
        upper_bound=0.05,
    )


def black_implied_volatility(
    forward: float,
    option_maturity: float,
    strike: float,
    payoff_unit: float,
    option_value: float,
) -> float:
    """Lognormal volatility reproducing a call value."""
    if option_maturity <= 0:
        return 0.0
    return _implied_volatility(
        lambda volatility: black_option_value(
            forward, volatility, option_maturity, strike, payoff_unit
        ),
        option_value,
        upper_bound=1.0,
    )
