"""Fully connected layer with explicit forward/backward buffers."""

from __future__ import annotations

import numpy as np

from .activations import Activation, get_activation
from .types import Array, MLPError

INIT_RANGE = 1.0


class InnerProductLayer:
    """Affine transform followed by an activation, also known as a dense layer.

    The layer owns every buffer it touches.  Callers write ``input`` before
    :meth:`forward` and ``output_grad`` before :meth:`backward`; the results land
    in ``output`` and ``input_grad`` respectively.  Weight gradients accumulate
    in ``grad_weights``/``grad_bias`` until :meth:`update_weights` applies and
    clears them.
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        *,
        activation: str | Activation = "sigmoid",
        rng: np.random.Generator | None = None,
    ) -> None:
        if input_size <= 0 or output_size <= 0:
            raise MLPError(
                f"layer sizes must be positive, got {input_size}x{output_size}"
            )
        self._input_size = int(input_size)
        self._output_size = int(output_size)
        self.activation = get_activation(activation)

        rng = rng if rng is not None else np.random.default_rng()
        self.weights: Array = rng.uniform(
            -INIT_RANGE, INIT_RANGE, size=(self._output_size, self._input_size)
        )
        self.bias: Array = np.zeros(self._output_size, dtype=np.float64)

        self.input: Array = np.zeros(self._input_size, dtype=np.float64)
        self.output: Array = np.zeros(self._output_size, dtype=np.float64)
        self.input_grad: Array = np.zeros(self._input_size, dtype=np.float64)
        self.output_grad: Array = np.zeros(self._output_size, dtype=np.float64)

        self.grad_weights: Array = np.zeros_like(self.weights)
        self.grad_bias: Array = np.zeros_like(self.bias)

    @property
    def input_size(self) -> int:
        return self._input_size

    @property
    def output_size(self) -> int:
        return self._output_size

    def forward(self) -> Array:
        """Compute ``output = f(weights @ input + bias)``."""

        if np.shape(self.input) != (self._input_size,):
            raise MLPError(
                f"input vector of size {np.size(self.input)} does not match "
                f"input size {self._input_size}"
            )
        total = self.weights @ self.input + self.bias
        self.output = np.asarray(self.activation.f(total), dtype=np.float64)
        return self.output

    def backward(self) -> Array:
        """Propagate ``output_grad`` to ``input_grad`` and accumulate gradients."""

        if np.shape(self.output_grad) != (self._output_size,):
            raise MLPError(
                f"output gradient vector of size {np.size(self.output_grad)} does "
                f"not match output size {self._output_size}"
            )
        local = self.activation.df(self.output) * self.output_grad
        self.input_grad = self.weights.T @ local
        self.grad_weights += np.outer(local, self.input)
        self.grad_bias += local
        return self.input_grad

    def update_weights(self, alpha: float) -> None:
        """Take one gradient-descent step of size ``alpha`` and clear gradients."""

        self.weights -= alpha * self.grad_weights
        self.bias -= alpha * self.grad_bias
        self.clear_deltas()

    def clear_deltas(self) -> None:
        self.grad_weights.fill(0.0)
        self.grad_bias.fill(0.0)

    def parameter_count(self) -> int:
        return int(self.weights.size + self.bias.size)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._input_size}, {self._output_size}, "
            f"activation={self.activation.name!r})"
        )


Layer = InnerProductLayer

__all__ = ["InnerProductLayer", "Layer", "INIT_RANGE"]
