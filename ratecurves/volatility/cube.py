"""
Swaption normal volatility cube.
"""
import logging
from typing import TYPE_CHECKING, Sequence

import numpy as np

from .base import (
    InterpolationMethod,
    QuotingConvention,
    SwaptionVolatilitySurface,
    convert_volatility_quote,
)

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel
    from ratecurves.products.swaption import Swaption

logger = logging.getLogger(__name__)

_GRID_TOLERANCE = 1e-12


def _grid_index(axis: np.ndarray, value: float) -> int:
    matches = np.flatnonzero(np.abs(axis - value) <= _GRID_TOLERANCE)
    return int(matches[0]) if matches.size else -1


def _bracket(axis: np.ndarray, value: float) -> tuple[int, int, float]:
    """Neighbouring nodes and weight of the upper one, constant outside the grid."""
    if axis.size == 1:
        return 0, 0, 0.0
    value = min(max(value, axis[0]), axis[-1])
    upper = int(np.searchsorted(axis, value, side="left"))
    upper = min(max(upper, 1), axis.size - 1)
    lower = upper - 1
    weight = (value - axis[lower]) / (axis[upper] - axis[lower])
    return lower, upper, float(weight)


class SwaptionMarketData(SwaptionVolatilitySurface):
    """Normal volatilities on a (strike offset, option maturity, swap length) grid.

    The cube is stored in normal volatilities together with the forward swap
    rate of every (maturity, length) node and the option discount factor of
    every maturity, which are needed to convert quotes into other conventions.
    """

    def __init__(
        self,
        name: str,
        option_maturities: Sequence[float],
        swap_lengths: Sequence[float],
        strike_offsets: Sequence[float],
        normal_volatilities,
        forward_swap_rates,
        option_discount_factors: Sequence[float],
        interpolation_method: InterpolationMethod = InterpolationMethod.NONE,
    ):
        """
        Initialize the cube.

        Args:
            name: Surface name used by products to look it up in a model
            option_maturities: Option maturities in years
            swap_lengths: Underlying swap lengths in years
            strike_offsets: Strike offsets from the forward swap rate (absolute, not bp)
            normal_volatilities: Array of shape (offsets, maturities, lengths)
            forward_swap_rates: Array of shape (maturities, lengths)
            option_discount_factors: Discount factor per option maturity
            interpolation_method: NONE (grid nodes only) or TRILINEAR
        """
        super().__init__(name)
        maturities = np.asarray(option_maturities, dtype=float)
        lengths = np.asarray(swap_lengths, dtype=float)
        offsets = np.asarray(strike_offsets, dtype=float)
        cube = np.asarray(normal_volatilities, dtype=float)
        forwards = np.asarray(forward_swap_rates, dtype=float)
        discount_factors = np.asarray(option_discount_factors, dtype=float)

        if cube.shape != (offsets.size, maturities.size, lengths.size):
            raise ValueError(
                f"Volatility cube shape {cube.shape} does not match grid "
                f"({offsets.size}, {maturities.size}, {lengths.size})"
            )
        if forwards.shape != (maturities.size, lengths.size):
            raise ValueError(
                f"Forward swap rate matrix shape {forwards.shape} does not match grid "
                f"({maturities.size}, {lengths.size})"
            )
        if discount_factors.shape != (maturities.size,):
            raise ValueError("Need one option discount factor per option maturity")

        offset_order = np.argsort(offsets)
        maturity_order = np.argsort(maturities)
        length_order = np.argsort(lengths)
        for axis_name, axis in (
            ("strike offsets", offsets), ("option maturities", maturities), ("swap lengths", lengths)
        ):
            if axis.size == 0 or np.unique(axis).size != axis.size:
                raise ValueError(f"Grid {axis_name} must be non-empty and distinct: {axis}")

        self._strike_offsets = offsets[offset_order]
        self._option_maturities = maturities[maturity_order]
        self._swap_lengths = lengths[length_order]
        self._cube = cube[np.ix_(offset_order, maturity_order, length_order)]
        self._forward_swap_rates = forwards[np.ix_(maturity_order, length_order)]
        self._option_discount_factors = discount_factors[maturity_order]
        self.interpolation_method = interpolation_method

    def get_option_maturities(self) -> list[float]:
        return self._option_maturities.tolist()

    def get_swap_lengths(self) -> list[float]:
        return self._swap_lengths.tolist()

    def get_strike_offsets(self) -> list[float]:
        return self._strike_offsets.tolist()

    def _node(self, option_maturity: float, swap_length: float) -> tuple[int, int]:
        i_maturity = _grid_index(self._option_maturities, option_maturity)
        i_length = _grid_index(self._swap_lengths, swap_length)
        if i_maturity < 0 or i_length < 0:
            raise ValueError(
                f"({option_maturity}, {swap_length}) is not a node of surface {self.name}"
            )
        return i_maturity, i_length

    def get_forward_swap_rate(self, option_maturity: float, swap_length: float) -> float:
        i_maturity, i_length = self._node(option_maturity, swap_length)
        return float(self._forward_swap_rates[i_maturity, i_length])

    def get_option_discount_factor(self, option_maturity: float) -> float:
        i_maturity = _grid_index(self._option_maturities, option_maturity)
        if i_maturity < 0:
            raise ValueError(f"Option maturity {option_maturity} is not part of surface {self.name}")
        return float(self._option_discount_factors[i_maturity])

    def get_normal_volatility(
        self, option_maturity: float, swap_length: float, strike_offset: float
    ) -> float:
        if self.interpolation_method is InterpolationMethod.NONE:
            i_offset = _grid_index(self._strike_offsets, strike_offset)
            i_maturity = _grid_index(self._option_maturities, option_maturity)
            i_length = _grid_index(self._swap_lengths, swap_length)
            if i_offset < 0 or i_maturity < 0 or i_length < 0:
                raise ValueError(
                    f"({strike_offset}, {option_maturity}, {swap_length}) is not a node of "
                    f"surface {self.name} and interpolation is disabled"
                )
            return float(self._cube[i_offset, i_maturity, i_length])
        return self._trilinear(strike_offset, option_maturity, swap_length)

    def _trilinear(self, strike_offset: float, option_maturity: float, swap_length: float) -> float:
        o0, o1, wo = _bracket(self._strike_offsets, strike_offset)
        m0, m1, wm = _bracket(self._option_maturities, option_maturity)
        l0, l1, wl = _bracket(self._swap_lengths, swap_length)

        value = 0.0
        for i_offset, weight_offset in ((o0, 1.0 - wo), (o1, wo)):
            for i_maturity, weight_maturity in ((m0, 1.0 - wm), (m1, wm)):
                for i_length, weight_length in ((l0, 1.0 - wl), (l1, wl)):
                    weight = weight_offset * weight_maturity * weight_length
                    if weight != 0.0:
                        value += weight * self._cube[i_offset, i_maturity, i_length]
        return float(value)

    @classmethod
    def from_quotes(
        cls,
        name: str,
        option_maturities: Sequence[float],
        swap_lengths: Sequence[float],
        strike_offsets: Sequence[float],
        quotes,
        forward_swap_rates,
        option_discount_factors: Sequence[float],
        quoting_convention: QuotingConvention = QuotingConvention.VOLATILITY_NORMAL,
        quote_shifts=None,
        interpolation_method: InterpolationMethod = InterpolationMethod.NONE,
        quotes_relative_to_atm: bool = False,
    ) -> "SwaptionMarketData":
        """
        Build a cube from quotes in any convention.

        Args:
            quotes: Array of shape (offsets, maturities, lengths) in ``quoting_convention``
            quote_shifts: Shift per (maturity, length) node (default: unshifted)
            quotes_relative_to_atm: Non-ATM quotes are spreads over the ATM quote
            (remaining arguments as in the constructor)
        """
        offsets = np.asarray(strike_offsets, dtype=float)
        quotes = np.array(quotes, dtype=float)
        forwards = np.asarray(forward_swap_rates, dtype=float)
        discount_factors = np.asarray(option_discount_factors, dtype=float)
        maturities = np.asarray(option_maturities, dtype=float)
        shifts = (
            np.zeros(forwards.shape) if quote_shifts is None
            else np.asarray(quote_shifts, dtype=float)
        )
        if quotes.shape != (offsets.size, maturities.size, len(swap_lengths)):
            raise ValueError(f"Quote cube shape {quotes.shape} does not match grid")
        if shifts.shape != forwards.shape:
            raise ValueError("Quote shifts must match the forward swap rate matrix")

        if quotes_relative_to_atm:
            atm_index = _grid_index(offsets, 0.0)
            if atm_index < 0:
                raise ValueError("Relative quotes need an ATM (zero) strike offset")
            for i_offset in range(offsets.size):
                if i_offset != atm_index:
                    quotes[i_offset] += quotes[atm_index]

        normal_volatilities = np.empty_like(quotes)
        for i_offset, offset in enumerate(offsets):
            for i_maturity, maturity in enumerate(maturities):
                for i_length in range(len(swap_lengths)):
                    forward = forwards[i_maturity, i_length]
                    normal_volatilities[i_offset, i_maturity, i_length] = convert_volatility_quote(
                        quotes[i_offset, i_maturity, i_length],
                        shifts[i_maturity, i_length],
                        quoting_convention,
                        0.0,
                        QuotingConvention.VOLATILITY_NORMAL,
                        forward,
                        forward + offset,
                        maturity,
                        discount_factors[i_maturity],
                    )

        return cls(
            name,
            option_maturities,
            swap_lengths,
            strike_offsets,
            normal_volatilities,
            forwards,
            discount_factors,
            interpolation_method,
        )

    @classmethod
    def from_swaptions(
        cls,
        name: str,
        atm_swaptions: Sequence["Swaption"],
        model: "AnalyticModel",
        option_discount_curve_name: str,
        strike_offsets: Sequence[float],
        quotes,
        quoting_convention: QuotingConvention = QuotingConvention.VOLATILITY_NORMAL,
        quote_shifts=None,
        interpolation_method: InterpolationMethod = InterpolationMethod.NONE,
        quotes_relative_to_atm: bool = True,
    ) -> "SwaptionMarketData":
        """
        Build a cube on the grid spanned by ATM swaptions.

        Forward swap rates come from the swaptions' underlying swaps and option
        discount factors from ``option_discount_curve_name``, both in ``model``.
        Swap lengths are rounded to whole years. The quote cube is indexed
        (offset, maturity, length) with maturities and lengths sorted ascending.
        """
        if not atm_swaptions:
            raise ValueError("Need at least one ATM swaption")
        by_node = {}
        for index, swaption in enumerate(atm_swaptions):
            if swaption.strike_offset != 0.0:
                raise ValueError(
                    f"Swaption {index} has strike offset {swaption.strike_offset}, expected ATM"
                )
            by_node[(swaption.option_maturity, float(round(swaption.swap_length)))] = swaption

        maturities = sorted({maturity for maturity, _ in by_node})
        lengths = sorted({length for _, length in by_node})
        discount_curve = model.get_discount_curve(option_discount_curve_name)

        forwards = np.empty((len(maturities), len(lengths)))
        discount_factors = np.empty(len(maturities))
        for i_maturity, maturity in enumerate(maturities):
            discount_factors[i_maturity] = discount_curve.get_discount_factor(model, maturity)
            for i_length, length in enumerate(lengths):
                swaption = by_node.get((maturity, length))
                if swaption is None:
                    raise ValueError(f"No ATM swaption for node ({maturity}, {length})")
                forwards[i_maturity, i_length] = swaption.underlying_swap.get_forward_swap_rate(model)

        logger.debug(
            "Building surface %s on %d maturities x %d lengths x %d offsets",
            name,
            len(maturities),
            len(lengths),
            len(strike_offsets),
        )
        return cls.from_quotes(
            name,
            maturities,
            lengths,
            strike_offsets,
            quotes,
            forwards,
            discount_factors,
            quoting_convention,
            quote_shifts,
            interpolation_method,
            quotes_relative_to_atm,
        )
