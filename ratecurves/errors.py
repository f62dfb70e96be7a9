"""Exceptions raised by curve construction, valuation and calibration."""


class MissingCurveError(ValueError):
    """Raised when a referenced curve name is not present in the model."""

    pass


class CurveTypeMismatchError(ValueError):
    """Raised when a curve exists but has the wrong kind and wrapping is disabled."""

    pass


class MissingPaymentOffsetError(ValueError):
    """Raised when a forward curve has no usable tenor for the requested operation."""

    pass


class MisspecifiedScheduleError(ValueError):
    """Raised for schedules a product cannot be valued on."""

    pass


class UnsupportedCombinationError(ValueError):
    """Raised when the single-curve shortcut meets a spread or notional exchange."""

    pass


class MissingCalibrationCurveError(MissingCurveError):
    """Raised when the curve a calibration spec should extend is not in the model."""

    pass


class MissingVolatilitySurfaceError(ValueError):
    """Raised when a referenced volatility surface is not present in the model."""

    pass


class InvalidTimeError(ValueError):
    """Raised when a product is valued at a time it is no longer defined for."""

    pass


class UnknownInstrumentTypeError(ValueError):
    """Raised for calibration instrument type tags the factory does not know."""

    pass


class InvalidCalibrationSpecError(ValueError):
    """Raised when a calibration spec lacks the fields its instrument type needs."""

    pass


class CalibrationStateError(RuntimeError):
    """Raised when the calibration engine is used out of order."""

    pass


class SolverError(RuntimeError):
    """Raised when the least-squares solver does not reach the requested accuracy.

    Attributes:
        iterations: Number of objective evaluations performed
        accuracy: Root mean square residual reached
    """

    def __init__(self, message: str, iterations: int, accuracy: float):
        super().__init__(message)
        self.iterations = iterations
        self.accuracy = accuracy


class CalibrationFailedError(RuntimeError):
    """Raised when the curve calibration does not converge.

    Attributes:
        iterations: Number of objective evaluations performed
        accuracy: Root mean square residual reached
    """

    def __init__(self, iterations: int, accuracy: float, message: str = ""):
        super().__init__(
            message
            or f"Calibration failed after {iterations} iterations "
            f"(achieved accuracy {accuracy:.3e})"
        )
        self.iterations = iterations
        self.accuracy = accuracy
