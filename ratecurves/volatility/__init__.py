"""Swaption volatility surfaces."""

from .base import (
    InterpolationMethod,
    QuotingConvention,
    SwaptionVolatilitySurface,
    convert_volatility_quote,
)
from .cube import SwaptionMarketData

__all__ = [
    "InterpolationMethod",
    "QuotingConvention",
    "SwaptionMarketData",
    "SwaptionVolatilitySurface",
    "convert_volatility_quote",
]
