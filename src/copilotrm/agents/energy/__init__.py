"""Energy Agent - module init."""

from copilotrm.agents.energy.agent import EnergyAgent

__all__ = ["EnergyAgent"]
