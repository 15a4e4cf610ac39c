"""Pairwise residue distance store.

Distances are kept in a single contiguous condensed array (the layout used by
``scipy.spatial.distance.pdist``): only pairs (i, j) with i < j are stored, in
row-major order, so pair (i, j) lives at

    offset(i, j) = i*N - i*(i+1)/2 + (j - i - 1)

Residues without a recorded position get ``SENTINEL_DISTANCE`` against every
other residue, which keeps them out of any contact set for realistic
thresholds.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np
from loguru import logger
from scipy.spatial.distance import pdist, squareform

from .base import CoordinateTable, InputError, ResourceError

SENTINEL_DISTANCE = 999.0


def pair_offset(i: int, j: int, nres: int) -> int:
    """Index of the unordered pair (i, j), i != j, in a condensed store of ``nres`` residues."""
    if i > j:
        i, j = j, i
    return i * nres - (i * (i + 1)) // 2 + (j - i - 1)


class DistanceMatrix:
    """Immutable symmetric distance matrix over the residues of one chain."""

    def __init__(self,
                 nres: int,
                 condensed: np.ndarray,
                 source_filename: Optional[str] = None,
                 source_chain: Optional[str] = None,
                 sequence: Optional[str] = None):
        expected = nres * (nres - 1) // 2
        if condensed.shape != (expected,):
            raise ValueError(f"condensed store has shape {condensed.shape}, expected ({expected},)")
        self._nres = int(nres)
        self._store = condensed
        self._store.flags.writeable = False
        self.source_filename = source_filename
        self.source_chain = source_chain
        self.sequence = sequence

    @classmethod
    def build(cls, table: Optional[CoordinateTable], sentinel: float = SENTINEL_DISTANCE) -> "DistanceMatrix":
        """Compute all pairwise Euclidean distances for ``table``.

        Raises InputError for a missing or empty table and ResourceError when
        the store cannot be allocated.
        """
        if table is None:
            raise InputError("No coordinate table supplied")
        nres = len(table)
        if nres == 0:
            raise InputError("Coordinate table holds zero residues")
        try:
            points = np.full((nres, 3), np.nan, dtype=np.float64)
            for idx, point in enumerate(table):
                if point is not None:
                    points[idx] = point
            if nres > 1:
                condensed = pdist(points, metric="euclidean")
                # rows of NaN (absent residues) propagate into every pair they touch
                condensed[np.isnan(condensed)] = sentinel
            else:
                condensed = np.empty(0, dtype=np.float64)
        except MemoryError as exc:
            raise ResourceError(f"Cannot allocate distance store for {nres} residues") from exc
        missing = int(np.isnan(points[:, 0]).sum())
        if missing:
            logger.debug(f"{missing}/{nres} residues have no coordinates; using sentinel {sentinel}")
        return cls(
            nres,
            condensed,
            source_filename=getattr(table, "source_filename", None),
            source_chain=getattr(table, "source_chain", None),
            sequence=getattr(table, "sequence", None),
        )

    @classmethod
    def from_points(cls, points: Iterable[Optional[Tuple[float, float, float]]], **meta) -> "DistanceMatrix":
        return cls.build(CoordinateTable(list(points), **meta))

    @property
    def nres(self) -> int:
        return self._nres

    def __len__(self) -> int:
        return self._nres

    @property
    def condensed(self) -> np.ndarray:
        """Read-only view of the triangular store."""
        return self._store

    def distance(self, i: int, j: int) -> float:
        if not (0 <= i < self._nres and 0 <= j < self._nres):
            raise IndexError(f"residue pair ({i}, {j}) outside chain of {self._nres}")
        if i == j:
            return 0.0
        return abs(float(self._store[pair_offset(i, j, self._nres)]))

    def contact_mask(self, threshold: float) -> np.ndarray:
        """Full N x N boolean grid of ``distance <= threshold`` (diagonal included)."""
        if self._nres == 1:
            return np.array([[0.0 <= threshold]])
        return squareform(np.abs(self._store), checks=False) <= threshold

    def contacts(self, threshold: float) -> List[Tuple[int, int]]:
        """0-based pairs (i, j), i < j, with distance strictly below ``threshold``, in (i, j) order."""
        if self._nres < 2:
            return []
        hits = np.flatnonzero(np.abs(self._store) < threshold)
        if hits.size == 0:
            return []
        ii, jj = np.triu_indices(self._nres, k=1)
        return list(zip(ii[hits].tolist(), jj[hits].tolist()))

    def __repr__(self) -> str:
        return f"DistanceMatrix(nres={self._nres}, chain={self.source_chain!r}, file={self.source_filename!r})"


__all__ = ["DistanceMatrix", "SENTINEL_DISTANCE", "pair_offset"]
