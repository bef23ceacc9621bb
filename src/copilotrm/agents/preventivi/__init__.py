"""Preventivi Agent - module init."""

from copilotrm.agents.preventivi.agent import PreventiviAgent

__all__ = ["PreventiviAgent"]
