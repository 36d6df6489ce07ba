"""Errors raised while configuring and assembling a show."""


class ChoreographyError(Exception):
    """Base class for show construction errors."""


class ConfigurationError(ChoreographyError, ValueError):
    """Bad show data: invalid parameters, unknown or duplicate drones."""


class LifecycleError(ChoreographyError, RuntimeError):
    """An operation was called in the wrong lifecycle state."""


class ActLockedError(LifecycleError):
    """The act was already locked and can no longer change."""


class ChoreographyClosedError(LifecycleError):
    """The choreography was already handed out for playback."""
