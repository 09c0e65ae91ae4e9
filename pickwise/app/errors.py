"""Exceptions raised while building a comparison."""


class ComparisonError(Exception):
    """Base class for failures surfaced to the client as a 400."""


class MalformedResponseError(ComparisonError):
    """The model returned something other than the JSON object we asked for."""


class PlacesError(ComparisonError):
    """The places search API refused the request or returned an error status."""
