"""
Base curve classes.

Curves are value objects: every operation that changes a curve returns a new
instance and leaves the original untouched. Curves that depend on other
curves look them up by name in the model they are evaluated against.
"""

import copy
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

import numpy as np

from ratecurves.interpolation import Interpolator, create_interpolator

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel


@dataclass(frozen=True)
class CurvePoint:
    """A curve node; parameter points are free variables of a calibration."""

    time: float
    value: float
    is_parameter: bool = False


class Curve(ABC):
    """Base class for everything a model holds under a curve name."""

    def __init__(self, name: str):
        if not name:
            raise ValueError("Curve name must not be empty")
        self.name = name

    @abstractmethod
    def get_value(self, model: Optional["AnalyticModel"], time: float) -> float:
        """Native value of the curve at a time."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class DiscountCurve(Curve):
    """Abstract discount curve."""

    @abstractmethod
    def get_discount_factor(self, model: Optional["AnalyticModel"], time: float) -> float:
        """Discount factor for a payment at the given time."""
        pass

    def get_zero_rate(self, model: Optional["AnalyticModel"], time: float) -> float:
        """Continuously compounded zero rate at the given time."""
        if time <= 0:
            return 0.0
        df = self.get_discount_factor(model, time)
        if df <= 0:
            raise ValueError(f"Non-positive discount factor on {self.name}: {df}")
        return -math.log(df) / time


class ForwardCurve(Curve):
    """Abstract forward curve."""

    @abstractmethod
    def get_forward(
        self,
        model: Optional["AnalyticModel"],
        fixing_time: float,
        payment_offset: Optional[float] = None,
    ) -> float:
        """Forward rate fixing at ``fixing_time`` for a period of ``payment_offset``.

        Without a payment offset the curve's own index tenor is used.
        """
        pass

    @abstractmethod
    def get_payment_offset(self, fixing_time: float) -> float:
        """Index tenor (years) of the forward fixing at the given time."""
        pass

    @property
    def base_discount_curve_name(self) -> Optional[str]:
        """Name of the discount curve this forward curve is read off, if any."""
        return None


class InterpolatedCurve(Curve):
    """Curve defined by points and an interpolation method."""

    default_interpolation_method = "LINEAR"

    def __init__(
        self,
        name: str,
        points: Iterable[CurvePoint] = (),
        interpolation_method: Optional[str] = None,
    ):
        super().__init__(name)
        self.interpolation_method = (
            interpolation_method or self.default_interpolation_method
        ).upper()
        self._set_points(tuple(points))

    def _set_points(self, points: tuple[CurvePoint, ...]) -> None:
        ordered = tuple(sorted(points, key=lambda p: p.time))
        times = [p.time for p in ordered]
        if len(set(times)) != len(times):
            raise ValueError(f"Duplicate point times on curve {self.name}: {times}")
        self._points = ordered
        self._interpolator: Optional[Interpolator] = None
        if ordered:
            self._interpolator = create_interpolator(
                self.interpolation_method, times, [p.value for p in ordered]
            )

    @property
    def points(self) -> tuple[CurvePoint, ...]:
        return self._points

    @property
    def times(self) -> list[float]:
        return [p.time for p in self._points]

    @property
    def values(self) -> list[float]:
        return [p.value for p in self._points]

    def get_value(self, model: Optional["AnalyticModel"], time: float) -> float:
        if self._interpolator is None:
            raise ValueError(f"Curve {self.name} has no points")
        return self._interpolator.interpolate(time)

    def _with_points(self, points: Iterable[CurvePoint]) -> "InterpolatedCurve":
        clone = copy.copy(self)
        clone._set_points(tuple(points))
        return clone

    def clone_with_point(
        self, time: float, value: float, is_parameter: bool = False
    ) -> "InterpolatedCurve":
        """New curve with one more point; fails on an existing time."""
        return self._with_points(self._points + (CurvePoint(time, value, is_parameter),))

    def get_parameter(self) -> np.ndarray:
        """Values of the parameter points in time order."""
        return np.array([p.value for p in self._points if p.is_parameter], dtype=float)

    def clone_for_parameter(self, values: Sequence[float]) -> "InterpolatedCurve":
        """New curve with the parameter points set to ``values``."""
        parameters = iter(values)
        n_parameters = sum(1 for p in self._points if p.is_parameter)
        if len(values) != n_parameters:
            raise ValueError(
                f"Curve {self.name} has {n_parameters} parameters, got {len(values)}"
            )
        return self._with_points(
            CurvePoint(p.time, float(next(parameters)), True) if p.is_parameter else p
            for p in self._points
        )

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}({self.name}, {len(self._points)} points, "
            f"{self.interpolation_method})"
        )
