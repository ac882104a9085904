from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from exceptions.exceptions import ClusterDetectionError

NOISE_LABEL = -1


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class PointSet:
    """Ordered points; labels are aligned with this order."""

    points: Tuple[Point3D, ...] = ()

    @classmethod
    def from_points(cls, points: Iterable[Point3D]) -> "PointSet":
        return cls(tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point3D]:
        return iter(self.points)

    def as_array(self) -> np.ndarray:
        """Return an (N, 3) float64 array."""
        if not self.points:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([(p.x, p.y, p.z) for p in self.points], dtype=np.float64)


@dataclass(frozen=True)
class ClusterLabels:
    """Per-point cluster ids. Noise is labeled -1."""

    labels: Tuple[int, ...] = ()

    @classmethod
    def from_iterable(cls, labels: Iterable[int]) -> "ClusterLabels":
        return cls(tuple(int(label) for label in labels))

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[int]:
        return iter(self.labels)

    @property
    def n_clusters(self) -> int:
        return len({label for label in self.labels if label != NOISE_LABEL})

    @property
    def n_noise(self) -> int:
        return sum(1 for label in self.labels if label == NOISE_LABEL)


@dataclass(frozen=True)
class ClusterParameters:
    radius: float
    min_points: int


class RunStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineOutcome:
    """Result of one pipeline run.

    Notes:
    - `labels` is set only when status is OK.
    - `error` is set only when status is FAILED.
    - `warnings` and `warning_messages` only cover records that pass the
      configured log level; with `--log-level ERROR` they stay empty.
    """

    status: RunStatus
    labels: Optional[ClusterLabels] = None
    error: Optional["ClusterDetectionError"] = None
    warnings: int = 0
    warning_messages: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.OK
