"""Custom exceptions for CopilotRM.

Provides a hierarchy of exceptions for different error types.
All CopilotRM exceptions inherit from CopilotRMException.
"""

from typing import Any, Dict, Optional


class CopilotRMException(Exception):
    """Base exception for all CopilotRM errors.
    
    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context about the error
    """
    
    def __init__(
        self,
        message: str,
        code: str = "COPILOTRM_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for transport-layer responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(CopilotRMException):
    """Raised when configuration is invalid or missing."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ValidationError(CopilotRMException):
    """Raised when input validation fails."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class CollaboratorError(CopilotRMException):
    """Raised when a critical-path collaborator fails.
    
    The rule-candidate generator and the hand-off deriver feed every later
    stage of a run, so their failure aborts the whole run.
    """
    
    def __init__(
        self,
        message: str,
        collaborator: str,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["collaborator"] = collaborator
        super().__init__(message, code="COLLABORATOR_ERROR", details=details)


class AgentError(CopilotRMException):
    """Raised when an agent fails to execute and failures are not isolated."""
    
    def __init__(
        self,
        message: str,
        agent_name: str,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["agent_name"] = agent_name
        super().__init__(message, code="AGENT_ERROR", details=details)


class RunDeadlineExceeded(CopilotRMException):
    """Raised when a run overruns the deadline set by its caller."""
    
    def __init__(self, message: str, stage: str, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        details["stage"] = stage
        super().__init__(message, code="DEADLINE_EXCEEDED", details=details)


class InvariantViolation(CopilotRMException):
    """Raised when a run produces output that breaks a core invariant."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INVARIANT_VIOLATION", details=details)


class AuditError(CopilotRMException):
    """Raised when audit persistence fails."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="AUDIT_ERROR", details=details)
