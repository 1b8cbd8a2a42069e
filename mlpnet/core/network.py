"""Multi-layer perceptron assembled from :class:`InnerProductLayer` objects."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import numpy as np

from .activations import Activation, get_activation
from .layer import InnerProductLayer
from .losses import REGISTRY as LOSS_REGISTRY
from .losses import Loss
from .types import Array, Labels, MLPError, Samples, TestResults, Vector, as_vector

DEFAULT_ALPHA = 0.01

EpochCallback = Callable[[], bool]


class Network:
    """Feed-forward network trained one sample at a time by backpropagation.

    ``dimensions`` lists the layer widths from input to output, so ``[4, 6, 3]``
    builds two layers (4→6 and 6→3).  The same activation is used by every
    layer.  Weights are drawn from ``rng`` when given, otherwise from a fresh
    generator seeded with ``seed``.
    """

    def __init__(
        self,
        dimensions: Sequence[int],
        *,
        activation: str | Activation = "sigmoid",
        loss: str | Loss = "error",
        alpha: float = DEFAULT_ALPHA,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        on_epoch: Optional[EpochCallback] = None,
    ) -> None:
        dims = [int(d) for d in dimensions]
        if len(dims) < 2:
            raise MLPError(
                f"at least two dimensions are required (input and output), got {len(dims)}"
            )
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.activation = get_activation(activation)
        self.loss_function = LOSS_REGISTRY.get(loss)
        self.alpha = float(alpha)
        self.on_epoch = on_epoch
        self.layers: List[InnerProductLayer] = [
            InnerProductLayer(in_dim, out_dim, activation=self.activation, rng=self.rng)
            for in_dim, out_dim in zip(dims[:-1], dims[1:])
        ]

    # ------------------------------------------------------------------
    # Shape accessors

    @property
    def dimensions(self) -> List[int]:
        return [self.input_size] + [layer.output_size for layer in self.layers]

    @property
    def input_size(self) -> int:
        return self.layers[0].input_size

    @property
    def output_size(self) -> int:
        return self.layers[-1].output_size

    @property
    def input_layer(self) -> InnerProductLayer:
        return self.layers[0]

    @property
    def output_layer(self) -> InnerProductLayer:
        return self.layers[-1]

    @property
    def input(self) -> Array:
        return self.input_layer.input

    @property
    def output(self) -> Array:
        return self.output_layer.output

    def parameter_count(self) -> int:
        return sum(layer.parameter_count() for layer in self.layers)

    # ------------------------------------------------------------------
    # Propagation

    def forward(self, sample: Vector) -> Array:
        """Feed ``sample`` through every layer and return the network output."""

        self.input_layer.input = as_vector(sample)
        last = len(self.layers) - 1
        for idx, layer in enumerate(self.layers):
            layer.forward()
            if idx < last:
                self.layers[idx + 1].input = layer.output.copy()
        return self.output

    def backward(self, error: Vector) -> None:
        """Propagate ``error`` (dLoss/dOutput) from the output layer backwards."""

        error = as_vector(error)
        if error.shape[0] != self.output_size:
            raise MLPError(
                f"error size {error.shape[0]} does not match output size {self.output_size}"
            )
        self.output_layer.output_grad = error
        for idx in reversed(range(len(self.layers))):
            layer = self.layers[idx]
            layer.backward()
            if idx > 0:
                self.layers[idx - 1].output_grad = layer.input_grad.copy()

    def update_weights(self) -> None:
        for layer in self.layers:
            layer.update_weights(self.alpha)

    def gradient(
        self, predicted: Vector, observed: Vector, result: Array | None = None
    ) -> Array:
        """Return the loss gradient of ``predicted`` against ``observed``."""

        return self.loss_function.df(predicted, observed, result)

    def label_to_vector(self, label: int, out: Array | None = None) -> Array:
        """Encode ``label`` as a one-hot vector of the network's output width.

        ``out`` is reused when it already has the output width, otherwise a new
        vector is allocated.
        """

        size = self.output_size
        if label < 0 or label >= size:
            raise MLPError(f"label {label} too high for output dimension {size}")
        if out is None or np.shape(out) != (size,):
            out = np.zeros(size, dtype=np.float64)
        else:
            out.fill(0.0)
        out[int(label)] = 1.0
        return out

    # ------------------------------------------------------------------
    # Dataset level operations

    def train(
        self,
        data: Samples,
        labels: Labels,
        max_epochs: int = 1,
        *,
        shuffle: bool = False,
    ) -> int:
        """Train on ``data`` for up to ``max_epochs`` epochs.

        Weights are updated after every sample.  After each epoch ``on_epoch``
        is called when set; a truthy return value stops training.  Returns the
        number of epochs that ran.
        """

        _check_counts(data, labels)
        error = np.zeros(self.output_size, dtype=np.float64)
        expected = np.zeros(self.output_size, dtype=np.float64)
        order = np.arange(len(data))

        epochs = 0
        while epochs < max_epochs:
            if shuffle:
                self.rng.shuffle(order)
            for idx in order:
                self.forward(data[idx])
                self.label_to_vector(int(labels[idx]), expected)
                self.gradient(self.output, expected, error)
                self.backward(error)
                self.update_weights()
            epochs += 1
            if self.on_epoch is not None and self.on_epoch():
                break
        return epochs

    def predict(self, sample: Vector) -> int:
        """Return the index of the strongest output for ``sample``."""

        return int(np.argmax(self.forward(sample)))

    def test(self, data: Samples, labels: Labels) -> TestResults:
        """Classify every sample by arg-max and compare against ``labels``."""

        _check_counts(data, labels)
        if len(data) == 0:
            raise MLPError("cannot test on an empty dataset")
        correct = 0
        total = 0
        for row, label in zip(data, labels):
            total += 1
            if self.predict(row) == int(label):
                correct += 1
        return TestResults(correct=correct, total=total, accuracy=correct / total)

    def loss(self, data: Samples, labels: Labels) -> float:
        """Return the summed loss of the dataset against one-hot targets."""

        _check_counts(data, labels)
        expected = np.zeros(self.output_size, dtype=np.float64)
        total = 0.0
        for row, label in zip(data, labels):
            self.label_to_vector(int(label), expected)
            self.forward(row)
            total += self.loss_function.f(self.output, expected)
        return total

    def loss_mean(self, data: Samples, labels: Labels) -> float:
        _check_counts(data, labels)
        if len(data) == 0:
            raise MLPError("cannot compute the mean loss of an empty dataset")
        return self.loss(data, labels) / len(data)

    def __repr__(self) -> str:
        return (
            f"Network(dimensions={self.dimensions}, activation={self.activation.name!r}, "
            f"loss={self.loss_function.name!r}, alpha={self.alpha})"
        )


def _check_counts(data: Samples, labels: Labels) -> None:
    if len(data) != len(labels):
        raise MLPError(f"data and label size mismatch ({len(data)} != {len(labels)})")


__all__ = ["Network", "EpochCallback", "DEFAULT_ALPHA"]
