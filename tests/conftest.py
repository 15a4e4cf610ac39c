"""Test configuration ensuring src package discoverability plus small PDB builders."""
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

ATOM_FORMAT = '%-6s%5d %-4s%1s%3s %1s%4d%1s   %8.3f%8.3f%8.3f%6.2f%6.2f          %2s'


def atom_line(serial: int, resseq: int, xyz: Tuple[float, float, float], chain: str = "A",
              resname: str = "GLY", name: str = " CA", altloc: str = " ",
              record: str = "ATOM", element: str = "C", occupancy: float = 1.0) -> str:
    x, y, z = xyz
    return ATOM_FORMAT % (record, serial, name, altloc, resname, chain, resseq, " ",
                          x, y, z, occupancy, 0.0, element)


def seqres_lines(chain: str, residues: Sequence[str]) -> list:
    lines = []
    for n, start in enumerate(range(0, len(residues), 13), start=1):
        chunk = " ".join(residues[start:start + 13])
        lines.append("SEQRES %3d %1s %4d  %s" % (n, chain, len(residues), chunk))
    return lines


def build_pdb(chains: Iterable[Tuple[str, Sequence[str]]], atoms: Iterable[str]) -> str:
    lines = ["HEADER    TEST STRUCTURE                          01-JAN-00   TEST"]
    for chain, residues in chains:
        lines.extend(seqres_lines(chain, residues))
    lines.extend(atoms)
    lines.append("END")
    return "\n".join(lines) + "\n"


def reset_settings_cache():  # convenience for tests toggling env flags
    from utils.settings import get_settings
    get_settings.cache_clear()  # type: ignore


@pytest.fixture
def three_residue_pdb(tmp_path) -> Path:
    """Chain A of three glycines on the x axis at 0, 1 and 10 Angstrom."""
    atoms = [
        atom_line(1, 1, (0.0, 0.0, 0.0)),
        atom_line(2, 2, (1.0, 0.0, 0.0)),
        atom_line(3, 3, (10.0, 0.0, 0.0)),
    ]
    path = tmp_path / "tri.pdb"
    path.write_text(build_pdb([("A", ["GLY", "GLY", "GLY"])], atoms))
    return path


@pytest.fixture
def app_config():
    from utils.config import load_config
    return load_config()


@pytest.fixture
def line_points():
    def _make(n: int, spacing: float = 3.0, missing: Optional[Iterable[int]] = None):
        skip = set(missing or ())
        return [None if i in skip else (i * spacing, 0.0, 0.0) for i in range(n)]
    return _make
