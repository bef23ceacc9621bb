"""Customer Care Agent - module init."""

from copilotrm.agents.customer_care.agent import CustomerCareAgent

__all__ = ["CustomerCareAgent"]
