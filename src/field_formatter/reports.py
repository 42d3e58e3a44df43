"""File export of formatted records.

Public entrypoint:
- export_delimited_file
"""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable

from .api import format_records


LOGGER = logging.getLogger(__name__)


def _write_records(path: str, records: Iterable[str]) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    # newline="" keeps the record delimiter exactly as configured.
    with open(path, "w", newline="", encoding="utf-8") as f:
        for record in records:
            f.write(record)


def export_delimited_file(payload: Any, output_path: str, delimiters: Any = None) -> int:
    """Format ``payload`` and write the records to ``output_path``.

    Parameters
    ----------
    payload:
        Rows, in any shape accepted by ``format_records``.
    output_path:
        Destination file. Parent directories are created if missing.
    delimiters:
        Preset name, mapping or ``DelimiterSet``.

    Returns
    -------
    int
        Number of records written.
    """

    LOGGER.info(
        "event=export_delimited_file status=starting output_path=%s", output_path
    )
    records = format_records(payload, delimiters)
    _write_records(output_path, records)
    LOGGER.info(
        "event=export_delimited_file status=finished file=%s rows=%d",
        output_path,
        len(records),
    )
    return len(records)
