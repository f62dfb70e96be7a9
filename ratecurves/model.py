"""Immutable registry of named curves and volatility surfaces.

An ``AnalyticModel`` is never modified. Adding or replacing curves returns a
new model that shares every untouched curve with the original, so a model
handed to a product or a solver step stays valid for as long as it is held.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Sequence

from ratecurves.curves.base import Curve, DiscountCurve, ForwardCurve, InterpolatedCurve
from ratecurves.errors import (
    CurveTypeMismatchError,
    MissingCurveError,
    MissingVolatilitySurfaceError,
)

if TYPE_CHECKING:
    from ratecurves.volatility.base import SwaptionVolatilitySurface


class AnalyticModel:
    """Curves and volatility surfaces keyed by name."""

    def __init__(
        self,
        curves: Iterable[Curve] = (),
        volatility_surfaces: Iterable["SwaptionVolatilitySurface"] = (),
    ):
        self._curves: Mapping[str, Curve] = MappingProxyType(
            {curve.name: curve for curve in curves}
        )
        self._volatility_surfaces: Mapping[str, "SwaptionVolatilitySurface"] = (
            MappingProxyType({surface.name: surface for surface in volatility_surfaces})
        )

    @classmethod
    def _from_mappings(cls, curves: dict, volatility_surfaces: dict) -> "AnalyticModel":
        model = cls.__new__(cls)
        model._curves = MappingProxyType(curves)
        model._volatility_surfaces = MappingProxyType(volatility_surfaces)
        return model

    @property
    def curves(self) -> Mapping[str, Curve]:
        return self._curves

    @property
    def volatility_surfaces(self) -> Mapping[str, "SwaptionVolatilitySurface"]:
        return self._volatility_surfaces

    def __contains__(self, name: str) -> bool:
        return name in self._curves

    def get_curve(self, name: str) -> Optional[Curve]:
        """Curve of the given name, or None."""
        return self._curves.get(name)

    def get_discount_curve(self, name: str) -> DiscountCurve:
        curve = self._curves.get(name)
        if curve is None:
            raise MissingCurveError(f"Discount curve {name} not found in model")
        if not isinstance(curve, DiscountCurve):
            raise CurveTypeMismatchError(
                f"Curve {name} is a {type(curve).__name__}, not a discount curve"
            )
        return curve

    def get_forward_curve(self, name: str) -> ForwardCurve:
        curve = self._curves.get(name)
        if curve is None:
            raise MissingCurveError(f"Forward curve {name} not found in model")
        if not isinstance(curve, ForwardCurve):
            raise CurveTypeMismatchError(
                f"Curve {name} is a {type(curve).__name__}, not a forward curve"
            )
        return curve

    def get_volatility_surface(self, name: str) -> "SwaptionVolatilitySurface":
        surface = self._volatility_surfaces.get(name)
        if surface is None:
            raise MissingVolatilitySurfaceError(f"Volatility surface {name} not found in model")
        return surface

    def add_curves(self, *curves: Curve) -> "AnalyticModel":
        """New model with the given curves added or replaced by name."""
        updated = dict(self._curves)
        updated.update((curve.name, curve) for curve in curves)
        return self._from_mappings(updated, dict(self._volatility_surfaces))

    def add_volatility_surfaces(
        self, *surfaces: "SwaptionVolatilitySurface"
    ) -> "AnalyticModel":
        """New model with the given surfaces added or replaced by name."""
        updated = dict(self._volatility_surfaces)
        updated.update((surface.name, surface) for surface in surfaces)
        return self._from_mappings(dict(self._curves), updated)

    def get_clone_for_parameter(
        self, parameters: Mapping[str, Sequence[float]]
    ) -> "AnalyticModel":
        """New model with the parameter points of the named curves replaced."""
        replaced = []
        for name, values in parameters.items():
            curve = self._curves.get(name)
            if curve is None:
                raise MissingCurveError(f"Curve {name} not found in model")
            if not isinstance(curve, InterpolatedCurve):
                raise CurveTypeMismatchError(f"Curve {name} carries no parameters")
            replaced.append(curve.clone_for_parameter(values))
        return self.add_curves(*replaced)

    def __repr__(self) -> str:
        return (
            f"AnalyticModel(curves={list(self._curves)}, "
            f"volatility_surfaces={list(self._volatility_surfaces)})"
        )
