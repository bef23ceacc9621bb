"""Hardware Agent - module init."""

from copilotrm.agents.hardware.agent import HardwareAgent

__all__ = ["HardwareAgent"]
