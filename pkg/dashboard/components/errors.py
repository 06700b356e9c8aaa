class ValuationError(Exception):
    """Base class for failures surfaced to the user as a single message."""


class ValidationError(ValuationError):
    """A required field or the location is missing or malformed."""


class GeolocationError(ValuationError):
    """The location service refused or failed to report a position."""


class TransportError(ValuationError):
    """The prediction request failed at the network or HTTP level."""

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
