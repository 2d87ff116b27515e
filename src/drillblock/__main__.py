"""
Command-line interface.

Without export options the GUI is started. With --obj and/or --script the
blocks are generated headless, written out, and the process exits.

Run with: python -m drillblock [--holes N | --batch "3,2,5"] [--obj PATH]
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from drillblock.config import DEFAULT_NUM_HOLES, DEFAULT_DRILL_RADIUS, DEFAULT_GROOVE_DEPTH
from drillblock.logging_config import setup_logging
from drillblock.model.state import Configuration, Mode, parse_batch_list

logger = logging.getLogger("drillblock.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="drillblock",
        description="Parametric drilled blocks: 3D preview, OBJ export and Rhino script export.",
    )
    counts = ap.add_mutually_exclusive_group()
    counts.add_argument('--holes', type=int, default=None, help=f'Hole count of a single block (default {DEFAULT_NUM_HOLES})')
    counts.add_argument('--batch', type=str, default=None, help='Comma separated hole counts, e.g. "3,2,5"')
    ap.add_argument('--radius', type=float, default=DEFAULT_DRILL_RADIUS, help='Drill radius in mm')
    ap.add_argument('--depth', type=float, default=DEFAULT_GROOVE_DEPTH, help='Groove depth in mm (0 disables grooves)')
    ap.add_argument('--obj', type=str, default=None, help='Write the blocks to this OBJ file and exit')
    ap.add_argument('--script', type=str, default=None, help='Write the Rhino script to this file and exit')
    ap.add_argument('--log-level', type=str, default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    ap.add_argument('--log-file', type=str, default=None, help='Also write the log to this file')
    return ap


def configuration_from_args(args: argparse.Namespace) -> Configuration:
    """Map parsed arguments onto a sanitized Configuration."""
    if args.batch is not None:
        counts = parse_batch_list(args.batch)
        if not counts:
            raise ValueError(f"No valid hole counts in --batch {args.batch!r}")
        return Configuration.from_values(
            mode=Mode.BATCH,
            batch_list=counts,
            drill_radius=args.radius,
            groove_depth=args.depth,
        )

    return Configuration.from_values(
        mode=Mode.SINGLE,
        num_holes=args.holes if args.holes is not None else DEFAULT_NUM_HOLES,
        drill_radius=args.radius,
        groove_depth=args.depth,
    )


def run_headless(configuration: Configuration, obj_path: Optional[str], script_path: Optional[str]) -> None:
    from drillblock.controller.solid_builder import SolidBuilder
    from drillblock.model.io import IOManager

    if script_path:
        IOManager.export_rhino_script(configuration, script_path)

    if obj_path:
        builder = SolidBuilder()
        try:
            IOManager.export_obj(builder.generate(configuration), obj_path)
        finally:
            builder.release()


def run_gui(configuration: Configuration) -> int:
    from drillblock.application import create_app
    from drillblock.model.state import ProjectState
    from drillblock.view.main_window import MainWindow

    app = create_app()
    project = ProjectState(configuration=configuration)
    window = MainWindow(project)
    window.show()
    return app.exec()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        configuration = configuration_from_args(args)
    except ValueError as e:
        logger.error(str(e))
        return 2

    if args.obj or args.script:
        try:
            run_headless(configuration, args.obj, args.script)
        except Exception as e:
            logger.error(f"Export failed: {e}")
            return 1
        logger.info("Export finished.")
        return 0

    return run_gui(configuration)


if __name__ == "__main__":
    sys.exit(main())
