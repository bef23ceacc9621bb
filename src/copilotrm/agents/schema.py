"""Agent Execution Result Schema.

Pydantic model for what one agent contributes to one run.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from copilotrm.data.schemas import ActionCandidate, CommunicationDraft, TaskItem


class AgentExecutionResult(BaseModel):
    """Output of a single agent invocation.
    
    Transient: produced once per agent per run and consumed immediately
    by the orchestrator. Agents never see each other's results.
    """
    
    model_config = ConfigDict(frozen=True)
    
    agent: str = Field(..., description="Name of the agent that produced the result")
    actions: List[ActionCandidate] = Field(
        default_factory=list,
        description="Extra action candidates (usually empty)"
    )
    tasks: List[TaskItem] = Field(default_factory=list)
    drafts: List[CommunicationDraft] = Field(default_factory=list)
    notes: List[str] = Field(
        default_factory=list,
        description="Free-text observations recorded in the audit trail"
    )
