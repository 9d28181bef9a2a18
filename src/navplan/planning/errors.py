"""Errors raised while computing a navigation log."""


class NavLogError(Exception):
    """Base class for navigation log computation failures."""


class InsufficientWaypointsError(NavLogError):
    """Raised when departure or arrival is missing or unresolved."""


class WeatherUnavailableError(NavLogError):
    """Raised when the weather provider fails."""


class RemoteCalculationError(NavLogError):
    """Raised when the remote calculation service fails.

    Attributes:
        status_code: HTTP status of the failed response, if any
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
