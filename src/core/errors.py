"""Exceptions raised by suse-observability-mcp."""

from typing import Optional


class ObservabilityError(Exception):
    """Base class for all errors raised by this server."""


class InvalidFilterError(ObservabilityError):
    """Component filters cannot be turned into an STQL query."""


class NoFilterProvidedError(InvalidFilterError):
    """No filter field produced a clause."""


class MissingBaseFilterError(InvalidFilterError):
    """Neighbor expansion was requested without a base selection."""


class InvalidDirectionError(InvalidFilterError):
    """Neighbor direction is not one of up, down or both."""


class InvalidLevelsError(InvalidFilterError):
    """Neighbor levels is not 1-14 or 'all'."""


class MetricDecodeError(ObservabilityError):
    """A metric query response could not be decoded."""


class UnsupportedResultTypeError(MetricDecodeError):
    """The response carries an unknown resultType."""


class MalformedMetricPointError(MetricDecodeError):
    """A point in the response is not a [timestamp, "value"] pair."""


class InvalidTimeFormatError(ObservabilityError):
    """A time argument is neither 'now' nor a duration."""


class UpstreamError(ObservabilityError):
    """The SUSE Observability API returned an error or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ComponentNotFoundError(ObservabilityError):
    """No component with the requested ID matched the lookup query."""
