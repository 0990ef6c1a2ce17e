"""Errors raised by the authorization core.

Permission denials are *not* exceptions; they are returned as
:class:`access_control.engine.Decision` values. The exceptions below cover the
remaining failure modes: missing resources and rejected administrative writes.
"""


class AccessControlError(Exception):
    """Base class for authorization core errors."""


class NotFound(AccessControlError):
    """A referenced role, type, element, identity, or permission does not exist."""


class UniquenessViolation(AccessControlError):
    """An administrative write would duplicate a unique name."""


class ValidationFailure(AccessControlError):
    """An administrative write was rejected as invalid; nothing was applied."""


__all__ = ["AccessControlError", "NotFound", "UniquenessViolation", "ValidationFailure"]
