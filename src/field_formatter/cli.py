"""Command line entry point: JSON/JSONL rows to delimited text."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import Any, Dict, List, Optional, Sequence

from .api import format_records_to_text, resolve_delimiters
from .formatter import NULL_CHAR
from .models import PRESETS, DelimiterSet
from .reports import export_delimited_file


LOGGER = logging.getLogger(__name__)


def _is_single_row(data: List[Any]) -> bool:
    # A one-line JSONL file holding an array row parses as a flat list.
    return bool(data) and not any(isinstance(item, (list, dict)) for item in data)


def _load_rows(path: str) -> List[Any]:
    """Load rows from ``path``.

    The whole file is parsed as one JSON document first: an array of rows, a
    single row array, or a single object row. Only when that fails is it read
    as JSONL, one row per non-blank line.
    """
    start = time.perf_counter()
    with open(path, "r", encoding="utf-8") as file:
        content = file.read()

    if not content.strip():
        raise ValueError("Input file is empty.")

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        rows: List[Any] = []
        for lineno, line in enumerate(content.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                rows.append(json.loads(line))
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON on line {lineno}: {exc.msg}") from exc
        fmt = "jsonl"
    else:
        if isinstance(data, dict):
            rows = [data]
        elif isinstance(data, list):
            rows = [data] if _is_single_row(data) else data
        else:
            raise ValueError("Input must hold JSON arrays or objects, one per row.")
        fmt = "json"

    LOGGER.info(
        "event=load_rows status=finished format=%s rows=%d path=%s latency_ms=%.2f",
        fmt,
        len(rows),
        path,
        (time.perf_counter() - start) * 1000.0,
    )
    return rows


def _build_delimiters(args: argparse.Namespace) -> DelimiterSet:
    overrides: Dict[str, Any] = {}
    if args.fields_terminated_by is not None:
        overrides["field_delim"] = args.fields_terminated_by
    if args.lines_terminated_by is not None:
        overrides["record_delim"] = args.lines_terminated_by
    if args.enclosed_by is not None:
        overrides["enclose"] = args.enclosed_by
    if args.escaped_by is not None:
        overrides["escape"] = args.escaped_by
    if args.enclose_required:
        overrides["enclose_required"] = True
    if args.null_string is not None:
        overrides["null_string"] = args.null_string
    return resolve_delimiters({"preset": args.preset, **overrides})


_ARG_ESCAPES = {"\\t": "\t", "\\n": "\n", "\\r\\n": "\r\n", "\\0": NULL_CHAR}


def _unescape_arg(value: str) -> str:
    return _ARG_ESCAPES.get(value, value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="field_formatter",
        description="Write JSON/JSONL rows as delimited text.",
    )
    parser.add_argument("--input", required=True, help="Input JSON or JSONL file")
    parser.add_argument(
        "--output", default=None, help="Output file (stdout when omitted)"
    )
    parser.add_argument(
        "--preset",
        default="default",
        choices=sorted(PRESETS),
        help="Delimiter preset to start from",
    )
    parser.add_argument("--fields-terminated-by", type=_unescape_arg, default=None)
    parser.add_argument("--lines-terminated-by", type=_unescape_arg, default=None)
    parser.add_argument("--enclosed-by", type=_unescape_arg, default=None)
    parser.add_argument("--escaped-by", type=_unescape_arg, default=None)
    parser.add_argument(
        "--enclose-required",
        action="store_true",
        help="Enclose every field",
    )
    parser.add_argument("--null-string", default=None)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s op=%(message)s",
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
    )

    try:
        delimiters = _build_delimiters(args)
        rows = _load_rows(args.input)
        if args.output:
            count = export_delimited_file(rows, args.output, delimiters)
            LOGGER.info("export_complete count=%d output=%s", count, args.output)
        else:
            sys.stdout.write(format_records_to_text(rows, delimiters))
    except (ValueError, OSError) as exc:
        LOGGER.error("event=cli status=error error=%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
