"""Batch distance queries over many primitive pairs.

Every query is independent (no shared state), so these helpers are plain
loops over ``distance``; callers may split the inputs across processes.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .distance import distance
from .parameters import Tolerances, resolve
from .result import DistanceResult

logger = logging.getLogger(__name__)


def distance_many(pairs: Iterable[tuple], tolerances: Tolerances | None = None) -> List[DistanceResult]:
    """``distance(a, b)`` for every ``(a, b)`` in ``pairs``, in order."""
    tol = resolve(tolerances)
    return [distance(a, b, tol) for a, b in pairs]


def distance_matrix(
    items_a: Sequence,
    items_b: Sequence,
    tolerances: Tolerances | None = None,
) -> np.ndarray:
    """Minimum distances between every item of ``items_a`` and ``items_b``.

    Returns
    -------
    np.ndarray
        Shape ``(len(items_a), len(items_b))``; entry ``[i, j]`` is
        ``distance(items_a[i], items_b[j]).distance``.
    """
    tol = resolve(tolerances)
    out = np.zeros((len(items_a), len(items_b)), dtype=float)
    for i, a in enumerate(items_a):
        for j, b in enumerate(items_b):
            out[i, j] = distance(a, b, tol).distance
    logger.debug("Distance matrix %dx%d computed", out.shape[0], out.shape[1])
    return out


def nearest(query, candidates: Sequence, tolerances: Tolerances | None = None) -> Tuple[int, DistanceResult]:
    """Index of the candidate closest to ``query`` and its result.

    Ties keep the lowest index. ``closest_point_on_self`` lies on ``query``.

    Raises
    ------
    ValueError
        If ``candidates`` is empty.
    """
    if len(candidates) == 0:
        raise ValueError("nearest() needs at least one candidate")
    tol = resolve(tolerances)
    best_index, best = 0, distance(query, candidates[0], tol)
    for index, candidate in enumerate(candidates[1:], start=1):
        result = distance(query, candidate, tol)
        if result.distance < best.distance:
            best_index, best = index, result
    return best_index, best
