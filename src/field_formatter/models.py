"""Data models for delimited-text output."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, List, Mapping, Optional, Tuple

from .formatter import NULL_CHAR


@dataclass(frozen=True)
class DelimiterSet:
    """Delimiters and quoting options used to write records.

    Attributes
    ----------
    field_delim:
        Written between two fields of a record.
    record_delim:
        Written after every record.
    enclose:
        Enclosing sequence. ``NULL_CHAR`` disables enclosing.
    escape:
        Escape sequence. ``NULL_CHAR`` disables escaping.
    enclose_required:
        Enclose every field, not only those containing a delimiter.
    null_string:
        Text written in place of an absent field value.
    """

    field_delim: str = ","
    record_delim: str = "\n"
    enclose: str = NULL_CHAR
    escape: str = NULL_CHAR
    enclose_required: bool = False
    null_string: str = "null"

    @property
    def must_enclose_for(self) -> Tuple[str, ...]:
        """Characters that force a field to be enclosed.

        Every character of the field and record delimiters counts on its own,
        so with ``"\\r\\n"`` records a lone ``"\\r"`` still forces enclosing.
        """

        chars: List[str] = []
        for ch in self.field_delim + self.record_delim:
            if ch not in chars:
                chars.append(ch)
        return tuple(chars)

    @classmethod
    def from_mapping(
        cls, config: Mapping[str, Any], base: Optional[DelimiterSet] = None
    ) -> DelimiterSet:
        """Build a delimiter set from a configuration mapping.

        Keys not present in ``config`` keep the value from ``base`` (the
        defaults when not given). Unknown keys or wrongly typed values raise
        ``ValueError``.
        """

        if not isinstance(config, Mapping):
            raise ValueError("Delimiter configuration must be a mapping/dict.")

        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(config) - set(known))
        if unknown:
            raise ValueError(
                f"Unknown delimiter option(s): {', '.join(map(str, unknown))}."
            )

        for key, value in config.items():
            if key == "enclose_required":
                if not isinstance(value, bool):
                    raise ValueError("'enclose_required' must be a boolean.")
                continue
            if not isinstance(value, str):
                raise ValueError(f"'{key}' must be a string.")
            if key in ("field_delim", "record_delim") and not value:
                raise ValueError(f"'{key}' must not be empty.")

        return replace(base or cls(), **dict(config))


DEFAULT_DELIMITERS = DelimiterSet()

MYSQL_DELIMITERS = DelimiterSet(
    field_delim=",",
    record_delim="\n",
    enclose="'",
    escape="\\",
    enclose_required=False,
)

PRESETS = {
    "default": DEFAULT_DELIMITERS,
    "mysql": MYSQL_DELIMITERS,
}
