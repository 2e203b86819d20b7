"""
Named-parameter rewriting and statement classification.

``rewrite_named_parameters`` turns ``:name`` tokens into positional placeholders
with a single forward scan over four states (normal text, quoted literal, line
comment, block comment). Text outside parameter tokens is copied as-is, so
engine-specific literal syntax (``x'..'``, ``b'..'``, ``_utf8mb4'..'``) and
whitespace survive unchanged.
"""

import re
from enum import Enum
from typing import NamedTuple

_QUOTES = frozenset("'\"`")

_PLACEHOLDERS = {
    "qmark": "?",
    # PyMySQL interpolates with ``%``; literal percent signs are doubled
    "format": "%s",
}

_LEADING_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class _State(Enum):
    NORMAL = "normal"
    QUOTED = "quoted"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


class RewrittenStatement(NamedTuple):
    sql: str
    names: list[str]


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def rewrite_named_parameters(sql: str, paramstyle: str = "qmark") -> RewrittenStatement:
    """
    Replace every ``:name`` outside quotes and comments with one placeholder.

    Returns the rewritten SQL and the parameter names in encounter order; a name
    used twice appears twice. A colon not followed by ``_`` or an ASCII letter
    (``:1``, ``::``, a lone ``:``) is ordinary text.

    paramstyle: ``"qmark"`` emits ``?``; ``"format"`` emits ``%s`` and escapes
    literal ``%`` as ``%%`` for drivers that ``%``-interpolate the statement.
    """
    try:
        placeholder = _PLACEHOLDERS[paramstyle]
    except KeyError:
        raise ValueError(f"Unsupported paramstyle: {paramstyle}") from None
    escape_percent = paramstyle == "format"

    out: list[str] = []
    names: list[str] = []

    def emit(text: str) -> None:
        out.append(text.replace("%", "%%") if escape_percent else text)

    state = _State.NORMAL
    delimiter = ""
    i = 0
    length = len(sql)

    while i < length:
        ch = sql[i]
        nxt = sql[i + 1] if i + 1 < length else ""

        if state is _State.NORMAL:
            if ch == ":" and _is_ident_start(nxt):
                end = i + 2
                while end < length and _is_ident_char(sql[end]):
                    end += 1
                names.append(sql[i + 1 : end])
                out.append(placeholder)
                i = end
                continue
            if ch == "-" and nxt == "-":
                state = _State.LINE_COMMENT
                emit("--")
                i += 2
                continue
            if ch == "/" and nxt == "*":
                state = _State.BLOCK_COMMENT
                emit("/*")
                i += 2
                continue
            if ch == "#":
                state = _State.LINE_COMMENT
            elif ch in _QUOTES:
                state = _State.QUOTED
                delimiter = ch
            emit(ch)
            i += 1

        elif state is _State.QUOTED:
            if ch == "\\" and delimiter != "`" and nxt:
                emit(ch + nxt)
                i += 2
                continue
            if ch == delimiter:
                if nxt == delimiter:
                    emit(ch + nxt)
                    i += 2
                    continue
                state = _State.NORMAL
            emit(ch)
            i += 1

        elif state is _State.LINE_COMMENT:
            if ch == "\n":
                state = _State.NORMAL
            emit(ch)
            i += 1

        else:
            if ch == "*" and nxt == "/":
                state = _State.NORMAL
                emit("*/")
                i += 2
                continue
            emit(ch)
            i += 1

    return RewrittenStatement("".join(out), names)


def is_read(sql: str) -> bool:
    """True if the statement's first word is SELECT (case-insensitive)."""
    m = _LEADING_WORD.match(sql.lstrip())
    return m is not None and m.group(0).upper() == "SELECT"
