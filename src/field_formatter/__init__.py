"""Public API for the delimited-text field formatter.

This package exposes the stable public API:
- `escape_and_enclose`
- `unescape_field`
- `DelimiterSet`
- `format_record`
- `format_records_to_text`
- `parse_record`
- `export_delimited_file`
"""

from __future__ import annotations

from .api import (
    format_record,
    format_records,
    format_records_to_text,
    parse_record,
    resolve_delimiters,
)
from .formatter import NULL_CHAR, escape_and_enclose, is_enabled, unescape_field
from .models import DEFAULT_DELIMITERS, MYSQL_DELIMITERS, DelimiterSet
from .reports import export_delimited_file

__all__ = [
    "NULL_CHAR",
    "escape_and_enclose",
    "unescape_field",
    "is_enabled",
    "DelimiterSet",
    "DEFAULT_DELIMITERS",
    "MYSQL_DELIMITERS",
    "format_record",
    "format_records",
    "format_records_to_text",
    "parse_record",
    "resolve_delimiters",
    "export_delimited_file",
]
