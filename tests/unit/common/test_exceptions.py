"""Tests for the exception hierarchy and logging helpers."""

import logging

import pytest

from copilotrm.common.exceptions import (
    AgentError,
    AuditError,
    CollaboratorError,
    ConfigurationError,
    CopilotRMException,
    InvariantViolation,
    RunDeadlineExceeded,
    ValidationError,
)
from copilotrm.common.logging import configure_logging, get_logger


class TestExceptions:
    """Tests for CopilotRMException subclasses."""
    
    @pytest.mark.parametrize("exc,code", [
        (ConfigurationError("m"), "CONFIG_ERROR"),
        (ValidationError("m"), "VALIDATION_ERROR"),
        (CollaboratorError("m", collaborator="rule_generator"), "COLLABORATOR_ERROR"),
        (AgentError("m", agent_name="assistance"), "AGENT_ERROR"),
        (RunDeadlineExceeded("m", stage="agents"), "DEADLINE_EXCEEDED"),
        (InvariantViolation("m"), "INVARIANT_VIOLATION"),
        (AuditError("m"), "AUDIT_ERROR"),
    ])
    def test_codes(self, exc, code):
        assert isinstance(exc, CopilotRMException)
        assert exc.code == code
    
    def test_to_dict(self):
        exc = AgentError("boom", agent_name="energy", details={"error_type": "KeyError"})
        
        assert exc.to_dict() == {
            "error": "AGENT_ERROR",
            "message": "boom",
            "details": {"error_type": "KeyError", "agent_name": "energy"},
        }


class TestLogging:
    """Tests for logging helpers."""
    
    def test_get_logger_attaches_one_handler(self):
        logger = get_logger("copilotrm.tests.logging", "DEBUG")
        get_logger("copilotrm.tests.logging", "DEBUG")
        
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    
    def test_configure_logging_uses_config(self, monkeypatch):
        monkeypatch.setenv("COPILOTRM_LOG_LEVEL", "WARNING")
        
        logger = configure_logging()
        try:
            assert logger.name == "copilotrm"
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(logging.NOTSET)
            logger.handlers.clear()
