"""Extension points around the agent stage.

Context providers enrich the context before rules and agents see it.
Evaluators read the agent results after aggregation. Both are optional
and their failures never abort a run.
"""

from typing import TYPE_CHECKING, Any, List, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field

from copilotrm.agents.schema import AgentExecutionResult

if TYPE_CHECKING:
    from copilotrm.orchestration.context import OrchestratorContext


class EvaluationResult(BaseModel):
    """Verdict of one evaluator over the agent results of a run."""

    should_continue: bool = Field(
        default=True,
        description="False signals the caller that follow-up processing should stop"
    )
    notes: List[str] = Field(default_factory=list)


@runtime_checkable
class ContextProvider(Protocol):
    """Fetches external data; the result is stored under ``name``."""

    name: str

    def provide(self, context: "OrchestratorContext") -> Any:
        ...


@runtime_checkable
class Evaluator(Protocol):
    """Judges the agent results of a run."""

    name: str

    def evaluate(
        self,
        context: "OrchestratorContext",
        executions: Sequence[AgentExecutionResult],
    ) -> EvaluationResult:
        ...
