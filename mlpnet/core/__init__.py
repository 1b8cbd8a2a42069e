"""Core numerical primitives for mlpnet."""

from . import activations, layer, losses, network, types

__all__ = ["activations", "layer", "losses", "network", "types"]
