# Serializer and parser for the Sales Navigator `query` parameter.
#
# Grammar:
#   record := '(' [field (',' field)*] ')'
#   field  := name ':' value
#   value  := record | 'List(' [value (',' value)*] ')' | quoted | bare
#   quoted := '"' ( '\' any | [^"\] )* '"'
#   bare   := [^,()"]+
#
# Records load as dicts, lists as lists, scalars as str (booleans stay
# "true"/"false"; callers interpret them).

from __future__ import annotations

import re
from typing import Any, Dict, List

from .errors import QuerySyntaxError

# Fields the platform always writes quoted, whatever their content.
ALWAYS_QUOTED = frozenset({"text", "keywords"})

_NEEDS_QUOTES = re.compile(r'[,()"\\]')
_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_BARE_STOP = ',()"'


def quote_scalar(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _dump_scalar(value: str, key: str | None) -> str:
    if (
        key in ALWAYS_QUOTED
        or not value
        or value != value.strip()
        or _NEEDS_QUOTES.search(value)
    ):
        return quote_scalar(value)
    return value


def _dump(value: Any, key: str | None = None) -> str:
    if isinstance(value, dict):
        fields = [f"{k}:{_dump(v, k)}" for k, v in value.items() if v is not None]
        return "(" + ",".join(fields) + ")"
    if isinstance(value, (list, tuple)):
        return "List(" + ",".join(_dump(v, key) for v in value) + ")"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return _dump_scalar(value, key)
    raise TypeError(f"Cannot serialize {type(value).__name__} into a search query")


def dump_query(record: Dict[str, Any]) -> str:
    """Serialize a mapping into the `(key:value,...)` query form."""
    if not isinstance(record, dict):
        raise TypeError("A search query must be a record (dict)")
    return _dump(record)


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    # -------------------------
    # Cursor helpers
    # -------------------------
    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            found = self._peek() or "end of input"
            raise QuerySyntaxError(f"Expected {char!r}, found {found!r}", self.pos)
        self.pos += 1

    # -------------------------
    # Productions
    # -------------------------
    def value(self) -> Any:
        ch = self._peek()
        if ch == "(":
            return self.record()
        if self.text.startswith("List(", self.pos):
            return self.sequence()
        if ch == '"':
            return self.quoted()
        return self.bare()

    def record(self) -> Dict[str, Any]:
        self._expect("(")
        out: Dict[str, Any] = {}
        if self._peek() == ")":
            self.pos += 1
            return out
        while True:
            m = _NAME.match(self.text, self.pos)
            if not m:
                raise QuerySyntaxError("Expected a field name", self.pos)
            self.pos = m.end()
            self._expect(":")
            out[m.group(0)] = self.value()
            if self._peek() == ",":
                self.pos += 1
                continue
            self._expect(")")
            return out

    def sequence(self) -> List[Any]:
        self.pos += len("List")
        self._expect("(")
        items: List[Any] = []
        if self._peek() == ")":
            self.pos += 1
            return items
        while True:
            items.append(self.value())
            if self._peek() == ",":
                self.pos += 1
                continue
            self._expect(")")
            return items

    def quoted(self) -> str:
        start = self.pos
        self._expect('"')
        buf = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\":
                if self.pos + 1 >= len(self.text):
                    break
                buf.append(self.text[self.pos + 1])
                self.pos += 2
                continue
            if ch == '"':
                self.pos += 1
                return "".join(buf)
            buf.append(ch)
            self.pos += 1
        raise QuerySyntaxError("Unterminated quoted string", start)

    def bare(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in _BARE_STOP:
            self.pos += 1
        if self.pos == start:
            raise QuerySyntaxError("Expected a value", start)
        return self.text[start:self.pos]


def load_query(text: str) -> Dict[str, Any]:
    """Parse a decoded `query` parameter into nested dicts and lists."""
    parser = _Parser(text.strip())
    if parser._peek() != "(":
        raise QuerySyntaxError("Search query must start with '('", 0)
    out = parser.record()
    if parser.pos != len(parser.text):
        raise QuerySyntaxError("Unexpected trailing characters", parser.pos)
    return out
