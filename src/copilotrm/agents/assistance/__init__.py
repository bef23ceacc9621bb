"""Assistance Agent - module init."""

from copilotrm.agents.assistance.agent import AssistanceAgent

__all__ = ["AssistanceAgent"]
