from stratspec.signals.composer import Composition, compose, compose_frame, describe_mode
from stratspec.signals.crossover import Crossover

__all__ = ["Composition", "Crossover", "compose", "compose_frame", "describe_mode"]
