"""Public API helpers for record-level delimited output."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .formatter import escape_and_enclose, is_enabled, unescape_field
from .models import DEFAULT_DELIMITERS, PRESETS, DelimiterSet


LOGGER = logging.getLogger(__name__)


def resolve_delimiters(config: Any) -> DelimiterSet:
    """Turn a preset name, mapping or ``DelimiterSet`` into a ``DelimiterSet``."""

    if config is None:
        return DEFAULT_DELIMITERS
    if isinstance(config, DelimiterSet):
        return config
    if isinstance(config, str):
        try:
            return PRESETS[config]
        except KeyError:
            raise ValueError(
                f"Unknown delimiter preset '{config}'. "
                f"Expected one of: {', '.join(sorted(PRESETS))}."
            ) from None
    if isinstance(config, Mapping):
        options = dict(config)
        preset = options.pop("preset", None)
        base = resolve_delimiters(preset) if preset is not None else None
        return DelimiterSet.from_mapping(options, base=base)
    raise ValueError("'delimiters' must be a preset name or a mapping.")


def _is_row_sequence(obj: Any) -> bool:
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes))


def _normalize_rows(
    rows_obj: Any, columns: Optional[Sequence[str]]
) -> List[List[Any]]:
    """Normalize sequence and mapping rows into lists of field values."""

    if not hasattr(rows_obj, "__iter__") or isinstance(rows_obj, (str, bytes)):
        raise ValueError("'rows' must be an iterable of sequences or mappings.")

    normalized: List[List[Any]] = []
    for idx, row in enumerate(rows_obj):
        if isinstance(row, Mapping):
            if columns is None:
                columns = [str(key) for key in row.keys()]
            normalized.append([row.get(col) for col in columns])
            continue

        if _is_row_sequence(row):
            normalized.append(list(row))
            continue

        raise ValueError(
            f"Row {idx} must be a sequence of values or a mapping, "
            f"got {type(row).__name__}."
        )

    return normalized


def format_record(
    fields: Iterable[Any], delimiters: DelimiterSet = DEFAULT_DELIMITERS
) -> str:
    """Format one record: escaped fields joined and terminated by delimiters."""

    formatted: List[str] = []
    for value in fields:
        if value is None:
            formatted.append(delimiters.null_string)
            continue
        formatted.append(
            escape_and_enclose(
                str(value),
                delimiters.escape,
                delimiters.enclose,
                delimiters.must_enclose_for,
                delimiters.enclose_required,
            )
        )
    return delimiters.field_delim.join(formatted) + delimiters.record_delim


def format_records(payload: Any, delimiters: Any = None) -> List[str]:
    """Format every row of ``payload`` and return the records as a list.

    Parameters
    ----------
    payload:
        Either a sequence of rows, or a mapping with a ``rows`` key and the
        optional ``columns`` and ``delimiters`` keys. A row is a sequence of
        values or a mapping projected onto ``columns``.
    delimiters:
        Preset name, mapping or ``DelimiterSet``. Overrides the payload's
        ``delimiters`` entry.

    Returns
    -------
    List[str]
        One formatted record per row, each ending with the record delimiter.
    """

    columns: Optional[Sequence[str]] = None
    if isinstance(payload, Mapping):
        if "rows" not in payload:
            raise ValueError("Missing 'rows' key in payload.")
        columns = payload.get("columns")
        if columns is not None and not _is_row_sequence(columns):
            raise ValueError("'columns' must be a sequence of column names.")
        if delimiters is None:
            delimiters = payload.get("delimiters")
        rows_obj = payload["rows"]
    elif _is_row_sequence(payload):
        rows_obj = payload
    else:
        raise ValueError("Input payload must be a sequence of rows or a mapping.")

    delimiter_set = resolve_delimiters(delimiters)
    rows = _normalize_rows(rows_obj, columns)
    LOGGER.debug("event=format_records rows=%d", len(rows))
    return [format_record(row, delimiter_set) for row in rows]


def format_records_to_text(payload: Any, delimiters: Any = None) -> str:
    """Format ``payload`` and return the delimited text as one string."""

    LOGGER.info("event=format_records_to_text status=starting")
    text = "".join(format_records(payload, delimiters))
    LOGGER.info("event=format_records_to_text status=finished chars=%d", len(text))
    return text


def parse_record(
    line: str, delimiters: DelimiterSet = DEFAULT_DELIMITERS
) -> List[Optional[str]]:
    """Split one formatted record back into its field values.

    Field delimiters inside an enclosed field are kept. An unenclosed field
    equal to ``null_string`` becomes ``None``. Values containing the
    enclosing sequence only split reliably when escaping is enabled.
    """

    if delimiters.record_delim and line.endswith(delimiters.record_delim):
        line = line[: len(line) - len(delimiters.record_delim)]

    escape = delimiters.escape
    enclose = delimiters.enclose
    field_delim = delimiters.field_delim
    escaping = is_enabled(escape)
    enclosing = is_enabled(enclose)

    values: List[Optional[str]] = []
    raw: List[str] = []
    in_enclose = False
    pos = 0
    while pos < len(line):
        if escaping and line.startswith(escape, pos):
            nxt = pos + len(escape)
            if line.startswith(escape, nxt):
                raw.append(escape + escape)
                pos = nxt + len(escape)
                continue
            if enclosing and line.startswith(enclose, nxt):
                raw.append(escape + enclose)
                pos = nxt + len(enclose)
                continue
        if enclosing and line.startswith(enclose, pos):
            in_enclose = not in_enclose
            raw.append(enclose)
            pos += len(enclose)
            continue
        if not in_enclose and line.startswith(field_delim, pos):
            values.append(_finish_field("".join(raw), delimiters))
            raw = []
            pos += len(field_delim)
            continue
        raw.append(line[pos])
        pos += 1

    values.append(_finish_field("".join(raw), delimiters))
    return values


def _finish_field(text: str, delimiters: DelimiterSet) -> Optional[str]:
    if text == delimiters.null_string:
        return None
    return unescape_field(text, delimiters.escape, delimiters.enclose)
