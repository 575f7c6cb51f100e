"""
Command line peak picking: mzML profile data in, MGF peak lists out.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .io import read_mzml, write_mgf
from .picking import LoggingProgress, PeakPickerRapid, PickerOptions
from .utils import ParallelMode


logger = logging.getLogger(__name__)


def _load_params(path: Optional[str]) -> dict:
    """Read a JSON parameter file into a dict (empty if no file given)."""
    if path is None:
        return {}
    with open(path) as f:
        params = json.load(f)
    if not isinstance(params, dict):
        raise ValueError(f"Parameter file {path} must contain a JSON object")
    return params


def build_options(args: argparse.Namespace) -> PickerOptions:
    """Merge parameter file values with command line flags (flags win)."""
    params = _load_params(args.params)
    if args.intensity_type is not None:
        params['intensity_type'] = args.intensity_type
    if args.ms1_only:
        params['ms1_only'] = True
    return PickerOptions.from_mapping(params)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rapidpick",
        description="Pick peaks in high resolution profile spectra (mzML/mzXML) and write MGF.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pick all spectra, report apex heights
  rapidpick sample.mzML -o sample.mgf

  # Report Gaussian areas, pick MS1 only, use 4 worker processes
  rapidpick sample.mzML -o sample.mgf --intensity-type peakarea --ms1-only -j 4

  # Read parameters from a JSON file
  rapidpick sample.mzML -o sample.mgf --params picker.json
        """
    )

    parser.add_argument(
        "input",
        type=str,
        help="Path to an mzML or mzXML file with profile spectra"
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        required=True,
        help="Output MGF file"
    )

    parser.add_argument(
        "--intensity-type",
        choices=["peakarea", "peakheight"],
        default=None,
        help="Report Gaussian area or apex height as peak intensity (default: peakheight)"
    )

    parser.add_argument(
        "--ms1-only",
        action="store_true",
        help="Only pick MS1 spectra; other levels are written unchanged"
    )

    parser.add_argument(
        "--params",
        type=str,
        default=None,
        help="JSON file with picker parameters (intensity_type, ms1_only)"
    )

    parser.add_argument(
        "--skip-empty",
        action="store_true",
        help="Do not write spectra without peaks"
    )

    parallel = parser.add_mutually_exclusive_group()
    parallel.add_argument(
        "-j", "--jobs",
        type=int,
        default=None,
        help="Number of worker processes"
    )
    parallel.add_argument(
        "--parallel",
        choices=[mode.name.lower() for mode in ParallelMode if mode != ParallelMode.CUSTOM],
        default="none",
        help="Parallelization mode (default: none)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.jobs is not None:
        parallel_mode, custom_workers = ParallelMode.CUSTOM, args.jobs
    else:
        parallel_mode, custom_workers = ParallelMode.from_name(args.parallel), None

    try:
        options = build_options(args)
        run = read_mzml(args.input)
        picker = PeakPickerRapid(options)
        picked = picker.pick_run(
            run,
            progress=LoggingProgress(logger),
            parallel_mode=parallel_mode,
            custom_workers=custom_workers,
        )
        write_mgf(picked, Path(args.output), skip_empty=args.skip_empty)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
