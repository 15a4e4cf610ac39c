"""
PDB file handling: extraction of per-residue reference coordinates for one chain.

The chain length and one-letter sequence come from the SEQRES header records;
positions come from the reference atom (C-alpha by default) of each standard
residue. Residue numbers are used directly as positions, so residue ``n``
lands at index ``n - 1`` of the CoordinateTable. When the file holds several
records for the same position (repeated lines, alternate locations, later
models) the last one in the file wins.
"""

import io
from pathlib import Path
from typing import IO, Dict, List, Optional, Union

from Bio import SeqIO
from Bio.PDB.PDBParser import PDBParser
from Bio.PDB.StructureBuilder import StructureBuilder
from loguru import logger

from analysis.base import CoordinateTable, InputError, Point3D
from utils.config import AppConfig


class LastRecordStructureBuilder(StructureBuilder):
    """StructureBuilder in which a repeated atom record replaces the earlier one.

    The stock builder drops a second blank-altloc record for an atom it already
    holds, and re-adding a known altloc keeps that altloc's old place; here the
    newest record always becomes the visible coordinate.
    """

    def init_atom(self, name, coord, b_factor, occupancy, altloc, fullname, *args, **kwargs):
        residue = self.residue
        if (residue is not None and altloc == " " and residue.has_id(name)
                and residue[name].get_fullname() == fullname):
            residue[name].set_coord(coord)
            return
        super().init_atom(name, coord, b_factor, occupancy, altloc, fullname, *args, **kwargs)
        if residue is not None and altloc != " " and residue.has_id(name):
            atom = residue[name]
            if atom.is_disordered():
                atom.disordered_select(altloc)


class PDBHandler:
    """Builds CoordinateTables from PDB-format text."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.parser = PDBParser(QUIET=True, structure_builder=LastRecordStructureBuilder())
        self.reference_atom = config.contact.reference_atom

    def read_file(self, path: Union[str, Path], chain: Optional[str] = None) -> CoordinateTable:
        """Open ``path`` and load the coordinates of ``chain`` (first SEQRES chain if None)."""
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as fh:
                return self.load_coordinates(fh, chain, source_filename=str(path))
        except OSError as e:
            raise InputError(f"Couldn't read coordinates from file [{path}]: {e.strerror or e}") from e

    def load_coordinates(self,
                         handle: IO[str],
                         chain: Optional[str] = None,
                         source_filename: Optional[str] = None) -> CoordinateTable:
        """
        Parse an open PDB handle into a CoordinateTable.

        Args:
            handle: text handle positioned at the start of a PDB file
            chain: chain identifier; defaults to the first chain with SEQRES records
            source_filename: provenance recorded on the table

        Returns:
            CoordinateTable with one slot per declared residue

        Raises:
            InputError: chain not declared in SEQRES, or declared with no residues
        """
        content = handle.read()
        sequences = self._read_seqres(content)
        if chain is None:
            chain = self.config.default_chain
        if chain is None:
            if not sequences:
                raise InputError(f"No SEQRES records found in [{source_filename or '<stream>'}]")
            chain = next(iter(sequences))
        sequence = sequences.get(chain)
        if sequence is None:
            available = ", ".join(sequences) or "none"
            raise InputError(
                f"Chain [{chain}] not declared in SEQRES records of [{source_filename or '<stream>'}] (available: {available})"
            )
        nres = len(sequence)
        if nres == 0:
            raise InputError(f"Chain [{chain}] declares zero residues")

        coords = self._read_positions(content, chain, nres, source_filename)
        table = CoordinateTable(
            coords=coords,
            source_filename=source_filename,
            source_chain=chain,
            sequence=sequence,
        )
        logger.info(f"Loaded chain {chain}: {table.observed}/{nres} residues with {self.reference_atom} coordinates")
        return table

    def _read_seqres(self, content: str) -> Dict[str, str]:
        """Map chain id -> one-letter sequence, in file order."""
        parsed: Dict[str, str] = {}
        for record in SeqIO.parse(io.StringIO(content), "pdb-seqres"):
            chain_id = record.annotations.get("chain")
            if chain_id is None or chain_id in parsed:
                continue
            parsed[chain_id] = str(record.seq)
        # SeqIO may reorder chains; keep the order of first appearance
        order = dict.fromkeys(line[11] for line in content.splitlines()
                              if line.startswith("SEQRES") and len(line) > 11)
        return {chain_id: parsed[chain_id] for chain_id in order if chain_id in parsed}

    def _read_positions(self,
                        content: str,
                        chain: str,
                        nres: int,
                        source_filename: Optional[str]) -> List[Optional[Point3D]]:
        coords: List[Optional[Point3D]] = [None] * nres
        structure = self.parser.get_structure(Path(source_filename).stem if source_filename else "structure",
                                              io.StringIO(content))
        chains = [model[chain] for model in structure if chain in model]
        if not chains:
            logger.warning(f"Chain {chain} has no ATOM records; every residue is unplaced")
            return coords

        # models and residues come in file order, so later records overwrite earlier ones
        for residue in (res for ch in chains for res in ch):
            hetflag, resseq, _icode = residue.id
            if hetflag != " " or self.reference_atom not in residue:
                continue
            atom = residue[self.reference_atom]
            if resseq <= 0 or resseq > nres:
                logger.warning(
                    f"Unexpected {self.reference_atom} record in chain {chain} [length {nres}]: "
                    f"residue {residue.get_resname()} {resseq} skipped"
                )
                continue
            x, y, z = (float(v) for v in atom.get_coord())
            coords[resseq - 1] = (x, y, z)
        return coords
