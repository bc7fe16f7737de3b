"""hexarena: deterministic tick-driven auto-battler on a hexagonal grid."""

__version__ = "0.1.0"
