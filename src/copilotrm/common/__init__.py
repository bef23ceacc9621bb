"""Common utilities - logging, config, exceptions, runtime services."""

from copilotrm.common.logging import get_logger
from copilotrm.common.config import Config, get_config, reset_config
from copilotrm.common.exceptions import (
    CopilotRMException,
    ConfigurationError,
    ValidationError,
    CollaboratorError,
    AgentError,
    RunDeadlineExceeded,
    InvariantViolation,
    AuditError,
)
from copilotrm.common.runtime import (
    Clock,
    SystemClock,
    FixedClock,
    IdGenerator,
    UuidIdGenerator,
    SequentialIdGenerator,
    RunDeadline,
)

__all__ = [
    # Logging
    "get_logger",
    # Config
    "Config",
    "get_config",
    "reset_config",
    # Exceptions
    "CopilotRMException",
    "ConfigurationError",
    "ValidationError",
    "CollaboratorError",
    "AgentError",
    "RunDeadlineExceeded",
    "InvariantViolation",
    "AuditError",
    # Runtime services
    "Clock",
    "SystemClock",
    "FixedClock",
    "IdGenerator",
    "UuidIdGenerator",
    "SequentialIdGenerator",
    "RunDeadline",
]
