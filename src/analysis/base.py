"""Common contact-map data structures and error types.

The CoordinateTable is the hand-off point between the PDB reader and the
distance matrix: one optional C-alpha position per residue of a chain, in
sequence order. Everything downstream (matrix, raster, exporters) only sees
this table, never the parsed structure.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

Point3D = Tuple[float, float, float]


class InputError(ValueError):
    """Unusable input: unreadable file, absent chain or no residues."""


class ResourceError(MemoryError):
    """Allocation failure while building the distance store or raster."""


@dataclass(slots=True)
class CoordinateTable:
    coords: List[Optional[Point3D]] = field(default_factory=list)
    source_filename: Optional[str] = None
    source_chain: Optional[str] = None
    sequence: Optional[str] = None

    def __len__(self) -> int:
        return len(self.coords)

    def __getitem__(self, index: int) -> Optional[Point3D]:
        return self.coords[index]

    def __iter__(self) -> Iterator[Optional[Point3D]]:
        return iter(self.coords)

    @property
    def nres(self) -> int:
        return len(self.coords)

    @property
    def observed(self) -> int:
        """Number of residues with a recorded position."""
        return sum(1 for c in self.coords if c is not None)


__all__ = ["Point3D", "CoordinateTable", "InputError", "ResourceError"]
