"""
Tabular reports of a calibration.
"""
from typing import Iterable, Sequence

import pandas as pd

from ratecurves.curves.base import InterpolatedCurve
from ratecurves.model import AnalyticModel
from ratecurves.products import AnalyticProduct

from .spec import CalibrationSpec

RESULT_COLUMNS = ["symbol", "type", "curve", "time", "value"]
CURVE_COLUMNS = ["curve", "time", "value", "is_parameter"]


def calibration_results_frame(
    specs: Sequence[CalibrationSpec],
    products: Sequence[tuple[str, AnalyticProduct]],
    model: AnalyticModel,
    evaluation_time: float,
) -> pd.DataFrame:
    """Value of every calibration product next to the point it calibrates."""
    rows = [
        {
            "symbol": symbol,
            "type": spec.instrument_type.value,
            "curve": spec.calibration_curve_name,
            "time": spec.calibration_time,
            "value": product.get_value(evaluation_time, model),
        }
        for spec, (symbol, product) in zip(specs, products, strict=True)
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def curve_points_frame(model: AnalyticModel, curve_names: Iterable[str]) -> pd.DataFrame:
    """Points of the named curves, one row per point."""
    rows = []
    for name in curve_names:
        curve = model.get_curve(name)
        if not isinstance(curve, InterpolatedCurve):
            continue
        rows.extend(
            {"curve": name, "time": p.time, "value": p.value, "is_parameter": p.is_parameter}
            for p in curve.points
        )
    return pd.DataFrame(rows, columns=CURVE_COLUMNS)
