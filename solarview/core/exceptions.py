"""
Domain error taxonomy.
Routers translate these into HTTP responses; services and the workflow engine only raise them.
"""


class SolarViewError(Exception):
    """Base class for every error raised by the tracking domain."""


class NotFoundError(SolarViewError, LookupError):
    """Installation, client, inverter or report absent."""


class InvalidInputError(SolarViewError, ValueError):
    """Malformed or rejected input (bad time string, future event, duplicate catalog entry...)."""


class ExternalServiceError(SolarViewError, RuntimeError):
    """The AI summarization collaborator failed. Recoverable: the user may retry."""


class StorageError(SolarViewError, RuntimeError):
    """A stored document cannot be read back. Never silently replaced by an empty value."""
