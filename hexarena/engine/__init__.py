"""Engine layer: step engine and headless world loop."""

from hexarena.engine.simulator import Simulator
from hexarena.engine.world_loop import WorldLoop

__all__ = ["Simulator", "WorldLoop"]
