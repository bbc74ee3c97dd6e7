"""Errors raised while fetching and decoding forecasts."""

from typing import Optional


class ForecastError(Exception):
    """Base class for forecast client errors."""
    pass


class UnsuccessfulStatusError(ForecastError):
    """Raised when the forecast service answers with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Invalid status code from Dark Sky: {status_code}")


class MalformedForecastError(ForecastError, ValueError):
    """Raised when a payload does not match the expected JSON shape."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


class UnrecognizedUnitError(ForecastError, ValueError):
    """Raised for a temperature unit token outside the known set."""

    def __init__(self, unit: object):
        self.unit = unit
        super().__init__(f"Unknown temperature unit: {unit!r}")
