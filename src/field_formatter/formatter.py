"""Escaping and enclosing of single field values for delimited-text output.

The rules follow the classic delimited export behaviour:

- the escape sequence escapes itself first (it is doubled),
- the enclosing sequence is then escaped with the un-doubled escape sequence,
- the value is enclosed when required, or when one of the trigger characters
  occurs in the raw (unescaped) value.

A token equal to ``NULL_CHAR`` (or empty / ``None``) switches the matching
feature off.

Public entrypoints:
- escape_and_enclose
- unescape_field
- is_enabled
"""

from __future__ import annotations

from typing import Iterable, List, Optional


NULL_CHAR = "\000"


def is_enabled(token: Optional[str]) -> bool:
    """Return True when ``token`` is a usable escape or enclose sequence."""

    return bool(token) and token != NULL_CHAR


def escape_and_enclose(
    value: Optional[str],
    escape: Optional[str],
    enclose: Optional[str],
    must_enclose_for: Optional[Iterable[str]] = None,
    enclose_required: bool = False,
) -> Optional[str]:
    """Escape ``value`` and enclose it if needed.

    Parameters
    ----------
    value:
        The field text. ``None`` is passed through unchanged.
    escape:
        Escape sequence. Empty, ``None`` or ``NULL_CHAR`` disables escaping.
    enclose:
        Enclosing sequence. Empty, ``None`` or ``NULL_CHAR`` disables
        enclosing.
    must_enclose_for:
        Characters that force enclosing when present in ``value``.
    enclose_required:
        Always enclose, regardless of ``must_enclose_for``.

    Returns
    -------
    Optional[str]
        The escaped and possibly enclosed value.
    """

    if value is None:
        return None

    escaping = is_enabled(escape)
    if escaping:
        with_escapes = value.replace(escape, escape + escape)
    else:
        with_escapes = value

    if not is_enabled(enclose):
        return with_escapes

    # The enclosing sequence is escaped with the single escape sequence,
    # after doubling, so the inserted escape is never doubled itself.
    if escaping:
        with_escapes = with_escapes.replace(enclose, escape + enclose)

    do_enclose = enclose_required
    if not do_enclose and must_enclose_for is not None:
        # Triggers are looked up in the raw value, not the escaped one.
        for reason in must_enclose_for:
            if reason and reason in value:
                do_enclose = True
                break

    if do_enclose:
        return enclose + with_escapes + enclose
    return with_escapes


def unescape_field(
    text: Optional[str],
    escape: Optional[str],
    enclose: Optional[str],
) -> Optional[str]:
    """Reverse ``escape_and_enclose`` for a single formatted field.

    Outer enclosing sequences are stripped when present on both ends, then
    ``escape + escape`` becomes ``escape`` and ``escape + enclose`` becomes
    ``enclose``. The result is exact when escaping is enabled and
    ``escape != enclose``. Without escaping, a raw value that starts and ends
    with ``enclose`` cannot be told apart from an enclosed one and is
    unwrapped.
    """

    if text is None:
        return None

    enclosing = is_enabled(enclose)
    if (
        enclosing
        and len(text) >= 2 * len(enclose)
        and text.startswith(enclose)
        and text.endswith(enclose)
    ):
        text = text[len(enclose) : len(text) - len(enclose)]

    if not is_enabled(escape):
        return text

    out: List[str] = []
    pos = 0
    length = len(text)
    while pos < length:
        if text.startswith(escape, pos):
            nxt = pos + len(escape)
            if text.startswith(escape, nxt):
                out.append(escape)
                pos = nxt + len(escape)
                continue
            if enclosing and text.startswith(enclose, nxt):
                out.append(enclose)
                pos = nxt + len(enclose)
                continue
        out.append(text[pos])
        pos += 1
    return "".join(out)
