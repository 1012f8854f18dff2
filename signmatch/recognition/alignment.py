"""
Distance & Alignment Engine
============================

Vector distance primitives and Dynamic Time Warping over feature-vector
sequences.
"""

import math
import logging
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)


def euclidean_distance(a, b) -> float:
    """L2 norm of ``a - b``; +inf when the lengths differ."""
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()
    if a.shape != b.shape:
        return math.inf
    return float(np.sqrt(np.sum((a - b) ** 2)))


def cosine_similarity(a, b) -> float:
    """dot(a, b) / (|a| |b|); 0 when either norm is zero or lengths differ."""
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()
    if a.shape != b.shape:
        return 0.0
    norm_a = float(np.sqrt(np.dot(a, a)))
    norm_b = float(np.sqrt(np.dot(b, b)))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(a, b)) / (norm_a * norm_b)


def _cost_matrix(seq1: Sequence, seq2: Sequence) -> np.ndarray:
    """Pairwise euclidean distances, shape (len(seq1), len(seq2))."""
    lengths = {np.asarray(v).size for v in seq1} | {np.asarray(v).size for v in seq2}
    if len(lengths) == 1:
        a = np.asarray(seq1, dtype=np.float64).reshape(len(seq1), -1)
        b = np.asarray(seq2, dtype=np.float64).reshape(len(seq2), -1)
        diff = a[:, None, :] - b[None, :, :]
        return np.sqrt(np.sum(diff * diff, axis=2))

    # Mixed vector lengths: fall back to the scalar primitive (inf entries)
    cost = np.empty((len(seq1), len(seq2)), dtype=np.float64)
    for i, u in enumerate(seq1):
        for j, v in enumerate(seq2):
            cost[i, j] = euclidean_distance(u, v)
    return cost


def dtw_distance(seq1: Sequence, seq2: Sequence) -> float:
    """DTW alignment cost normalized by (m + n).

    D[i][j] = d(i, j) + min(D[i-1][j], D[i][j-1], D[i-1][j-1]). The first
    row and column accumulate along their single predecessor only.

    Returns:
        +inf when either sequence is empty
    """
    m, n = len(seq1), len(seq2)
    if m == 0 or n == 0:
        return math.inf

    cost = _cost_matrix(seq1, seq2)
    dtw = np.full((m, n), np.inf, dtype=np.float64)

    dtw[0, 0] = cost[0, 0]
    for i in range(1, m):
        dtw[i, 0] = dtw[i - 1, 0] + cost[i, 0]
    for j in range(1, n):
        dtw[0, j] = dtw[0, j - 1] + cost[0, j]

    for i in range(1, m):
        for j in range(1, n):
            dtw[i, j] = cost[i, j] + min(
                dtw[i - 1, j],      # insertion
                dtw[i, j - 1],      # deletion
                dtw[i - 1, j - 1],  # match
            )

    return float(dtw[m - 1, n - 1]) / (m + n)
