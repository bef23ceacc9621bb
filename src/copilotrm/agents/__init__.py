"""Business agents and the registry that holds them."""

from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.assistance import AssistanceAgent
from copilotrm.agents.compliance import ComplianceAgent
from copilotrm.agents.content import ContentAgent
from copilotrm.agents.customer_care import CustomerCareAgent
from copilotrm.agents.energy import EnergyAgent
from copilotrm.agents.hardware import HardwareAgent
from copilotrm.agents.preventivi import PreventiviAgent
from copilotrm.agents.telephony import TelephonyAgent
from copilotrm.agents.registry import AGENT_TYPES, AgentRegistry

__all__ = [
    "AgentExecutionResult",
    "BusinessAgent",
    "AssistanceAgent",
    "ComplianceAgent",
    "ContentAgent",
    "CustomerCareAgent",
    "EnergyAgent",
    "HardwareAgent",
    "PreventiviAgent",
    "TelephonyAgent",
    "AGENT_TYPES",
    "AgentRegistry",
]
