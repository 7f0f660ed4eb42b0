"""Command-line interface for finding promising players in a roster export."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from fmscout.config.weights import ConfigurationError
from fmscout.config_loader import ScoringProfile
from fmscout.ingest import FileError
from fmscout.pipeline import RunStatus, run_scout
from fmscout.pool import FilterCriteria, export_shortlist_to_csv
from fmscout.render import make_console, render_header, render_report, scoring_progress
from fmscout.scoring import ScoringCancelled, ScoringDispatchError


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_NO_MATCHES = 3
EXIT_ROWS_REJECTED = 4


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _non_negative_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}") from None
    if not math.isfinite(value) or value < 0:
        raise argparse.ArgumentTypeError(f"must be a finite number >= 0, got {text!r}")
    return value


def _positive_int(text: str) -> int:
    value = _non_negative_int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fmscout",
        description="Find high-potential, low-value players in a roster export",
    )
    parser.add_argument("-f", "--file", type=Path, required=True, help="Path to roster CSV")
    parser.add_argument(
        "-p",
        "--position",
        required=True,
        help="Position category or group (e.g., ST, CB, DEF, MID)",
    )
    parser.add_argument("-a", "--max-age", type=_non_negative_int, default=23, help="Maximum age")
    parser.add_argument(
        "-m",
        "--max-value",
        type=_non_negative_float,
        default=5.0,
        help="Maximum market value in millions",
    )
    parser.add_argument(
        "-n",
        "--min-potential",
        type=_non_negative_int,
        default=130,
        help="Minimum potential ability",
    )
    parser.add_argument(
        "--top",
        type=_non_negative_int,
        default=10,
        help="Number of players to show (0 shows every match)",
    )
    parser.add_argument("--no-age-filter", action="store_true", help="Ignore --max-age")
    parser.add_argument("--no-value-filter", action="store_true", help="Ignore --max-value")
    parser.add_argument("--no-potential-filter", action="store_true", help="Ignore --min-potential")
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Scoring processes (default: FMSCOUT_WORKERS or CPU count)",
    )
    parser.add_argument("--profile", type=Path, default=None, help="Load scoring profile JSON")
    parser.add_argument("--save-profile", type=Path, default=None, help="Save scoring profile JSON")
    parser.add_argument("--output", type=Path, default=None, help="Write shortlist CSV")
    parser.add_argument("--report", type=Path, default=None, help="Write run summary JSON")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_error(console: Console, label: str, exc: Exception) -> None:
    console.print(Text.assemble((f"{label}: ", "bold red"), str(exc)))


def _exit_code(status: RunStatus, rows_rejected: int) -> int:
    if status is RunStatus.NO_MATCHES:
        return EXIT_NO_MATCHES
    if rows_rejected:
        return EXIT_ROWS_REJECTED
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    console = make_console(no_color=args.no_color)
    render_header(console)

    try:
        profile = ScoringProfile.load(args.profile) if args.profile else ScoringProfile()
        weights = profile.weight_table()
        constants = profile.constants()
        criteria = FilterCriteria.from_options(
            position=args.position,
            max_age=None if args.no_age_filter else args.max_age,
            max_value_millions=None if args.no_value_filter else args.max_value,
            min_potential=None if args.no_potential_filter else args.min_potential,
            groups=profile.groups(),
        )
    except ConfigurationError as exc:
        _print_error(console, "Configuration error", exc)
        return EXIT_FATAL
    logger.debug("Filter criteria: %s", criteria)

    if args.save_profile:
        try:
            ScoringProfile.from_runtime(weights, constants, profile.position_groups).save(args.save_profile)
        except OSError as exc:
            _print_error(console, "Write error", exc)
            return EXIT_FATAL
        console.print(f"Saved scoring profile to {args.save_profile}")

    console.print("Loading and analyzing player data...")
    try:
        with scoring_progress(console) as progress_cb:
            report = run_scout(
                args.file,
                criteria,
                weights=weights,
                constants=constants,
                limit=args.top,
                workers=args.workers,
                progress_cb=progress_cb,
            )
    except FileError as exc:
        _print_error(console, "File error", exc)
        return EXIT_FATAL
    except (ScoringDispatchError, ScoringCancelled) as exc:
        _print_error(console, "Scoring failed", exc)
        return EXIT_FATAL

    render_report(console, report, weights)

    try:
        if args.output:
            args.output.write_text(export_shortlist_to_csv(report.shortlist), encoding="utf-8")
            console.print(f"Wrote shortlist to {args.output}")
        if args.report:
            payload = report.summary.as_dict()
            payload["failures"] = [
                {"row": f.row_index, "kind": f.kind, "field": f.field, "message": f.message}
                for f in report.failures
            ]
            args.report.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            console.print(f"Wrote run summary to {args.report}")
    except OSError as exc:
        _print_error(console, "Write error", exc)
        return EXIT_FATAL

    return _exit_code(report.summary.status, report.summary.rows_rejected)


if __name__ == "__main__":
    sys.exit(main())
