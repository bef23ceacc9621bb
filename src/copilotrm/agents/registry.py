"""Agent Registry - the fixed, ordered set of business agents.

Configured once at process start, from code or from an agents YAML file.
Not mutable afterwards: selection for a run only filters it.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Type

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from copilotrm.agents.assistance import AssistanceAgent
from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.compliance import ComplianceAgent
from copilotrm.agents.content import ContentAgent
from copilotrm.agents.customer_care import CustomerCareAgent
from copilotrm.agents.energy import EnergyAgent
from copilotrm.agents.hardware import HardwareAgent
from copilotrm.agents.preventivi import PreventiviAgent
from copilotrm.agents.telephony import TelephonyAgent
from copilotrm.common.exceptions import ConfigurationError
from copilotrm.common.runtime import Clock, IdGenerator
from copilotrm.data.schemas import EventType


logger = logging.getLogger(__name__)


# Known agent variants, in default registration order
AGENT_TYPES: Dict[str, Type[BusinessAgent]] = {
    AssistanceAgent.name: AssistanceAgent,
    PreventiviAgent.name: PreventiviAgent,
    TelephonyAgent.name: TelephonyAgent,
    EnergyAgent.name: EnergyAgent,
    HardwareAgent.name: HardwareAgent,
    CustomerCareAgent.name: CustomerCareAgent,
    ContentAgent.name: ContentAgent,
    ComplianceAgent.name: ComplianceAgent,
}


class AgentEntry(BaseModel):
    """One agent line of the wiring file."""
    name: str = Field(..., description="Registered agent name")
    enabled: bool = Field(default=True)


class AgentWiring(BaseModel):
    """In-memory representation of agents.yaml."""
    version: str = Field(default="1.0.0")
    agents: List[AgentEntry] = Field(default_factory=list)


class AgentRegistry:
    """Ordered, immutable collection of business agents."""
    
    def __init__(self, agents: Sequence[BusinessAgent]):
        names = [agent.name for agent in agents]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Duplicate agent names in registry: {duplicates}",
                details={"duplicates": duplicates},
            )
        self._agents: Tuple[BusinessAgent, ...] = tuple(agents)
    
    @classmethod
    def default(
        cls,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ) -> "AgentRegistry":
        """Registry with every known agent, in default order."""
        return cls([agent_type(ids=ids, clock=clock) for agent_type in AGENT_TYPES.values()])
    
    @classmethod
    def from_yaml(
        cls,
        path: str | Path,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ) -> "AgentRegistry":
        """Build a registry from an agents wiring file.
        
        Args:
            path: Path to agents.yaml
            ids: Id generator shared by the agents
            clock: Clock shared by the agents
            
        Returns:
            Registry with the enabled agents, in file order
            
        Raises:
            ConfigurationError: If the file is missing, malformed or names an unknown agent
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Agents file not found: {path}", details={"path": str(path)})
        
        with open(path, "r", encoding="utf-8") as f:
            try:
                raw_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Agents file is not valid YAML: {path}", details={"path": str(path)}
                ) from e
        
        try:
            wiring = AgentWiring.model_validate(raw_config)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Agents file has an invalid structure: {path}",
                details={"path": str(path), "errors": e.errors(include_url=False)},
            ) from e
        
        agents: List[BusinessAgent] = []
        for entry in wiring.agents:
            agent_type = AGENT_TYPES.get(entry.name)
            if agent_type is None:
                raise ConfigurationError(
                    f"Unknown agent '{entry.name}' in {path}",
                    details={"agent": entry.name, "known": sorted(AGENT_TYPES)},
                )
            if entry.enabled:
                agents.append(agent_type(ids=ids, clock=clock))
        
        registry = cls(agents)
        logger.info(f"Loaded {len(registry)} agents from {path} (wiring v{wiring.version})")
        return registry
    
    def select(self, event_type: EventType) -> List[BusinessAgent]:
        """Agents supporting the event type, in registration order."""
        return [agent for agent in self._agents if agent.supports(event_type)]
    
    def get(self, name: str) -> Optional[BusinessAgent]:
        for agent in self._agents:
            if agent.name == name:
                return agent
        return None
    
    @property
    def names(self) -> List[str]:
        return [agent.name for agent in self._agents]
    
    def __iter__(self) -> Iterator[BusinessAgent]:
        return iter(self._agents)
    
    def __len__(self) -> int:
        return len(self._agents)
