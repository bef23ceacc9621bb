"""TaskItem schema - canonical definition."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from copilotrm.data.schemas.base import DomainModel


TaskKind = Literal["assist", "followup", "campaign", "customer-care", "approval", "content"]


class TaskItem(DomainModel):
    """Work item created by an agent for a human role.
    
    Approval and completion happen in an external workflow system.
    """
    id: str = Field(..., description="Unique task identifier, fresh per creation")
    kind: TaskKind = Field(..., description="Task category")
    title: str = Field(..., description="Task title")
    assignee_role: str = Field(..., description="Role expected to pick the task up")
    priority: int = Field(..., description="Higher is more urgent")
    customer_id: Optional[str] = Field(default=None)
    ticket_id: Optional[str] = Field(default=None)
    offer_id: Optional[str] = Field(default=None)
    status: Literal["open", "done"] = Field(default="open")
    created_at: datetime = Field(..., description="Creation time from the injected clock")
