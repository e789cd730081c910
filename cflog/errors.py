"""Errors raised by cflog."""


class CflogError(Exception):
    """Base class for every error cflog raises."""


class ConfigurationError(CflogError):
    """The transport could not be built, or the environment is unusable."""


class SerializationError(CflogError):
    """A payload could not be turned into a JSON document."""


class SubmissionError(CflogError):
    """An entry could not be built or delivered to Cloud Logging."""


class CloseError(CflogError):
    """The transport failed to shut down cleanly."""
