from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..core.constants import DEFAULT_FACE_MATCH_THRESHOLD
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class FaceMatch:
    is_match: bool
    distance: float


def to_descriptor(values: Sequence[float], *, expected_length: int | None = None) -> np.ndarray:
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValidationError("Face descriptor must be a list of numbers") from None
    if arr.ndim != 1 or arr.size == 0:
        raise ValidationError("Face descriptor must be a flat, non-empty list")
    if expected_length is not None and arr.size != expected_length:
        raise ValidationError(f"Face descriptor must have {expected_length} values")
    if not np.all(np.isfinite(arr)):
        raise ValidationError("Face descriptor contains invalid numbers")
    return arr


def match_face(
    live_descriptor: Sequence[float],
    stored_embedding: Sequence[float],
    *,
    threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
) -> FaceMatch:
    """Compare a live descriptor with a stored embedding (Euclidean distance).

    A match requires ``distance < threshold``.
    """
    stored = to_descriptor(stored_embedding)
    live = to_descriptor(live_descriptor, expected_length=stored.size)
    distance = float(np.linalg.norm(live - stored))
    return FaceMatch(is_match=distance < float(threshold), distance=distance)
