"""Interest rate curve calibration and analytic product valuation.

This package builds a consistent set of discount and forward curves from a
declarative list of calibration instruments and values interest rate products
against them in a multi-curve framework.

Key modules:
- calibration: Calibration specs, the calibration engine and its solver
- curves: Discount, forward and synthesized wrapper curves
- products: Deposits, FRAs, swap legs, swaps and swaptions
- volatility: Swaption normal volatility cubes and quoting conventions
- schedule: Periods and schedules
- conventions: Day count conventions, tenors and valuation policies
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Main modules are imported via subpackages
    "calibration",
    "curves",
    "products",
    "volatility",
    "schedule",
    "conventions",
    "interpolation",
]
