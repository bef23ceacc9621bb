"""Orchestration - Agent routing and the run loop.

Components:
- OrchestratorContext / OrchestratorOutput: immutable input and output of a run
- AgentRouter: isolated, order-preserving agent invocation
- Orchestrator: the only place a run happens
- ContextProvider / Evaluator: optional hooks around the agent stage
"""

from copilotrm.orchestration.context import OrchestratorContext, OrchestratorOutput
from copilotrm.orchestration.agent_router import (
    AgentOutcome,
    AgentRouter,
    RouterResult,
    shutdown_executor,
)
from copilotrm.orchestration.extensions import ContextProvider, EvaluationResult, Evaluator
from copilotrm.orchestration.orchestrator import Orchestrator, run_orchestration

__all__ = [
    # Context (input and output)
    "OrchestratorContext",
    "OrchestratorOutput",
    # Agent Router
    "AgentOutcome",
    "AgentRouter",
    "RouterResult",
    "shutdown_executor",
    # Extensions
    "ContextProvider",
    "EvaluationResult",
    "Evaluator",
    # Run loop
    "Orchestrator",
    "run_orchestration",
]
