"""Command-line interface for cmap.

Example:
    cmap -c A -t 7.5 -o contacts.txt 1abc.pdb
    cmap --no-view -e map.eps 1abc.pdb

Reads one chain of a PDB file, builds the C-alpha distance matrix, writes any
requested exports and then opens the interactive terminal view.
"""
from __future__ import annotations
import argparse
import curses
from typing import List, Optional

from loguru import logger

from analysis.base import InputError, ResourceError
from analysis.distance_matrix import DistanceMatrix
from performance.timing import TIMINGS, time_block
from reporting.exports import export_to_file
from ui.terminal import run_viewer
from ui.view import ContactMapView
from utils.config import __version__, load_config
from utils.logging_config import configure_logging
from utils.pdb_handler import PDBHandler
from utils.settings import get_settings


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("cmap", description="Terminal protein contact-map viewer")
    parser.add_argument("pdb_file", help="PDB file to read")
    parser.add_argument("-c", "--chain", default=None, help="Chain identifier (default: first SEQRES chain)")
    parser.add_argument("-e", "--eps", dest="eps_file", default=None, help="Write the contact map as EPS to this file")
    parser.add_argument("-o", "--output", dest="output_file", default=None, help="Write contacting residue pairs to this file")
    parser.add_argument("-t", "--threshold", type=float, default=None, help="Contact distance threshold in Angstroms")
    parser.add_argument("-n", "--no-view", action="store_true", help="Skip the interactive view (exports only)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs, log_file=settings.log_file)
    TIMINGS.enabled = settings.enable_timing
    config = load_config()

    threshold = config.contact.default_threshold if args.threshold is None else args.threshold
    if threshold < config.contact.min_threshold:
        logger.warning(f"Threshold {threshold} below {config.contact.min_threshold}; clamped")
        threshold = config.contact.min_threshold
    chain = args.chain or config.default_chain

    handler = PDBHandler(config)
    try:
        table = handler.read_file(args.pdb_file, chain)
        with time_block("build_distance_matrix", items=len(table)):
            matrix = DistanceMatrix.build(table, sentinel=config.contact.missing_distance)
    except InputError as exc:
        logger.error(str(exc))
        return 1
    except ResourceError as exc:
        logger.error(f"Out of memory: {exc}")
        return 1

    exports = ((args.output_file, "txt"), (args.eps_file, "eps"))
    for path, fmt in exports:
        if not path:
            continue
        try:
            export_to_file(path, fmt, matrix, threshold, tool=config.tool_identity)
        except OSError as exc:
            logger.error(f"Couldn't write {fmt} export to file [{path}]: {exc.strerror or exc}")
            return 1
        print(f"Wrote {'contacts' if fmt == 'txt' else 'contact map'} to file [{path}]")

    if not args.no_view:
        try:
            view = ContactMapView(matrix, threshold, config)
            run_viewer(view, config.display)
        except ResourceError as exc:
            logger.error(f"Out of memory: {exc}")
            return 1
        except curses.error as exc:
            logger.error(f"Terminal failure: {exc}")
            return 1

    if TIMINGS.enabled:
        logger.debug(f"Timings: {TIMINGS.snapshot()}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
