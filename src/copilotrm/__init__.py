"""CopilotRM - Decision core for business-automation events."""

__version__ = "0.1.0"
__author__ = "CopilotRM Team"

from copilotrm.data.schemas import DomainEvent, EventType, ActionCandidate, ScoreBreakdown
from copilotrm.orchestration import Orchestrator, OrchestratorContext, OrchestratorOutput

__all__ = [
    "DomainEvent",
    "EventType",
    "ActionCandidate",
    "ScoreBreakdown",
    "Orchestrator",
    "OrchestratorContext",
    "OrchestratorOutput",
]
