"""Content Agent - module init."""

from copilotrm.agents.content.agent import ContentAgent

__all__ = ["ContentAgent"]
