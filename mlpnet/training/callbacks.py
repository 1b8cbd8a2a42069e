"""Epoch callbacks for :meth:`mlpnet.core.network.Network.train`."""

from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple

from ..core.network import Network
from ..core.types import Labels, Samples


class EpochMonitor:
    """Evaluate the network after every epoch and decide when to stop.

    Instances are zero-argument callables suitable for ``Network.on_epoch``.
    Each call runs :meth:`Network.test` and :meth:`Network.loss_mean` on the
    monitored data, forwards the metrics to every sink exposing ``on_epoch``,
    and returns ``True`` once accuracy reaches ``target_accuracy`` or, when
    ``patience`` is set, once the loss has not improved for that many epochs.
    """

    def __init__(
        self,
        network: Network,
        samples: Samples,
        labels: Labels,
        *,
        sinks: Sequence[object] = (),
        target_accuracy: float | None = 1.0,
        patience: int | None = None,
        min_delta: float = 1e-9,
        log_every: int = 0,
    ) -> None:
        self.network = network
        self.samples = samples
        self.labels = labels
        self.sinks = list(sinks)
        self.target_accuracy = target_accuracy
        self.patience = patience
        self.min_delta = min_delta
        self.log_every = log_every
        self.epoch = 0
        self.best_loss = float("inf")
        self.epochs_no_improve = 0
        self.history: List[Tuple[int, Mapping[str, float]]] = []

    @property
    def last(self) -> Mapping[str, float]:
        return self.history[-1][1] if self.history else {}

    def __call__(self) -> bool:
        self.epoch += 1
        results = self.network.test(self.samples, self.labels)
        loss = self.network.loss_mean(self.samples, self.labels)
        metrics = {
            "loss": float(loss),
            "accuracy": float(results.accuracy),
            "correct": float(results.correct),
            "total": float(results.total),
        }
        self.history.append((self.epoch, metrics))
        for sink in self.sinks:
            sink.on_epoch(self.epoch, metrics)  # type: ignore[attr-defined]
        if self.log_every and self.epoch % self.log_every == 0:
            print(f"Epoch {self.epoch:>6}  Accuracy: {results.accuracy * 100.0:.4f}%, loss: {loss:.4f}")

        if loss < self.best_loss - self.min_delta:
            self.best_loss = loss
            self.epochs_no_improve = 0
        else:
            self.epochs_no_improve += 1

        if self.target_accuracy is not None and results.accuracy >= self.target_accuracy:
            return True
        return bool(self.patience and self.epochs_no_improve >= self.patience)


__all__ = ["EpochMonitor"]
