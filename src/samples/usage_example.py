"""Example usage of the field_formatter package.

Run with: python src/samples/usage_example.py
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict


def build_example_payload() -> Dict[str, Any]:
    """Build a minimal example payload to format.

    Returns
    -------
    Dict[str, Any]
        A payload following the documented input schema.
    """

    return {
        "columns": ["id", "name", "comment"],
        "rows": [
            {"id": 1, "name": "Smith, John", "comment": 'said "hi"'},
            {"id": 2, "name": "O'Brien", "comment": None},
            [3, "back\\slash", "plain"],
        ],
    }


def main() -> None:
    """Run the example using the public API functions."""

    # Make package importable when running from project root
    sys.path.append("src")

    from field_formatter import (  # pylint: disable=C0415
        MYSQL_DELIMITERS,
        escape_and_enclose,
        export_delimited_file,
        format_records_to_text,
        parse_record,
    )

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    logger = logging.getLogger("usage_example")

    logger.info("single field: %s", escape_and_enclose("he,llo", "\\", '"', [","]))

    payload = build_example_payload()
    logger.info("formatting payload with %d rows", len(payload["rows"]))

    text = format_records_to_text(payload, MYSQL_DELIMITERS)
    for line in text.splitlines(keepends=True):
        logger.info("record: %r -> %r", line, parse_record(line, MYSQL_DELIMITERS))

    count = export_delimited_file(payload, "reports/example.csv", "mysql")
    logger.info("records written: %d", count)


if __name__ == "__main__":
    main()
