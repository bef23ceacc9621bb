"""Base business agent contract."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Optional

from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.common.constants import IdPrefixes
from copilotrm.common.runtime import Clock, IdGenerator, SystemClock, UuidIdGenerator
from copilotrm.data.schemas import CommunicationDraft, EventType, TaskItem

if TYPE_CHECKING:
    from copilotrm.orchestration.context import OrchestratorContext


class BusinessAgent(ABC):
    """A domain policy module reacting to qualifying event types.
    
    Contract:
    - supports() is a pure predicate on the event type
    - execute() reads the context only and returns a fresh result
    - no state is carried from one execute() call to the next
    
    Ids and timestamps come from the injected generator and clock, so
    every task and draft gets a fresh id per creation.
    """
    
    name: str = ""
    
    def __init__(
        self,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ):
        if not self.name:
            raise TypeError(f"{type(self).__name__} must define a non-empty name")
        self._ids = ids or UuidIdGenerator()
        self._clock = clock or SystemClock()
    
    @abstractmethod
    def supports(self, event_type: EventType) -> bool:
        """Whether this agent reacts to the given event type."""
    
    @abstractmethod
    def execute(self, context: "OrchestratorContext") -> AgentExecutionResult:
        """Run the agent's policy against one context."""
    
    def _task(self, **fields: Any) -> TaskItem:
        return TaskItem(
            id=self._ids.new_id(IdPrefixes.TASK),
            created_at=self._clock.now(),
            **fields,
        )
    
    def _draft(self, **fields: Any) -> CommunicationDraft:
        return CommunicationDraft(id=self._ids.new_id(IdPrefixes.DRAFT), **fields)
    
    def _result(
        self,
        tasks: Iterable[TaskItem] = (),
        drafts: Iterable[CommunicationDraft] = (),
        notes: Iterable[str] = (),
    ) -> AgentExecutionResult:
        return AgentExecutionResult(
            agent=self.name,
            tasks=list(tasks),
            drafts=list(drafts),
            notes=list(notes),
        )
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
