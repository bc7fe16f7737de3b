"""AI layer: target perception and pathfinding."""

from hexarena.ai.pathfinding import Pathfinder
from hexarena.ai.perception import Perception

__all__ = ["Pathfinder", "Perception"]
