"""Hand-offs - routes ranked actions to the agent or human that owns them."""

from typing import Callable, List, NamedTuple, Optional, Sequence

from pydantic import Field

from copilotrm.data.schemas import ActionCandidate, DomainModel


class HandoffEdge(DomainModel):
    """A request to route a decision from one owner to another."""
    
    from_agent: str = Field(..., description="Owner handing the decision off")
    to_agent: str = Field(..., description="Agent or role receiving it")
    reason: str = Field(..., description="Why the hand-off happens")
    source_action_id: Optional[str] = Field(default=None)
    blocking: bool = Field(
        default=False,
        description="If true, the target must run in-chain before results are returned"
    )
    requires_approval: bool = Field(
        default=False,
        description="If true, the target is not run automatically; a manual approval is needed"
    )


HandoffDeriver = Callable[[Sequence[ActionCandidate]], List[HandoffEdge]]


class _HandoffRule(NamedTuple):
    agent: str
    trigger: str
    from_agent: str
    reason: str


HANDOFF_RULES = (
    _HandoffRule("preventivi", "not-worth-repairing", "assistance", "repair-not-worth -> replacement quote"),
    _HandoffRule("telephony", "gamer-lag", "assistance", "gamer profile + network issue"),
    _HandoffRule("content", "invoice-hardware", "ingest", "hardware stock arrived"),
    _HandoffRule("energy", "energy-signal", "assistance", "energy saving interest detected"),
)


def derive_handoffs(actions: Sequence[ActionCandidate]) -> List[HandoffEdge]:
    """Derive hand-off edges from ranked actions, in action order."""
    edges = []
    for action in actions:
        for rule in HANDOFF_RULES:
            if action.agent == rule.agent and action.trigger == rule.trigger:
                edges.append(HandoffEdge(
                    from_agent=rule.from_agent,
                    to_agent=rule.agent,
                    reason=rule.reason,
                    source_action_id=action.id,
                ))
    return edges
