"""Core clawgate module: exceptions, logging and tool contracts."""

from clawgate.core.exceptions import (
    ClawgateError,
    CollaboratorError,
    CompositionError,
    ErrorCode,
    RemoteCallError,
    ValidationError,
)

__all__ = [
    "ClawgateError",
    "CollaboratorError",
    "CompositionError",
    "ErrorCode",
    "RemoteCallError",
    "ValidationError",
]
