r"""Parser and writer for shell-style ``NAME=value`` files.

Values come in three historical styles, tried in this order:

1. double-quoted, with ``\\``, ``\"``, ``\$`` and backquote escapes and
   literal newlines allowed inside the quotes
2. single-quoted, taken literally
3. bare, up to an inline `` #`` comment

A double- or single-quoted value with no closing quote falls back to the
bare style, which covers files written by older releases that did not
escape anything.
"""

import re
from typing import Mapping, Optional


ENV_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
ASSIGNMENT_PATTERN = re.compile(r"^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)=(.*)$")

DOUBLE_QUOTE_ESCAPES = frozenset('\\"$`')


def quote_value(value: str) -> str:
    escaped = "".join(
        f"\\{char}" if char in DOUBLE_QUOTE_ESCAPES else char for char in value
    )
    return f'"{escaped}"'


def format_export(name: str, value: str) -> str:
    return f"export {name}={quote_value(value)}"


def is_valid_name(name: str) -> bool:
    return bool(ENV_NAME_PATTERN.match(name))


def _parse_bare(raw: str) -> str:
    value = raw.strip()
    comment = value.find(" #")
    if comment != -1:
        value = value[:comment].rstrip()
    if value[:1] in ("'", '"'):
        value = value[1:]
    if value[-1:] in ("'", '"'):
        value = value[:-1]
    return value


def _parse_single_quoted(raw: str) -> Optional[str]:
    end = raw.find("'", 1)
    if end == -1:
        return None
    return raw[1:end]


def _parse_double_quoted(
    raw: str, lines: list[str], next_index: int
) -> tuple[Optional[str], int]:
    """Return the unescaped value and how many extra lines it spanned."""
    chunks: list[str] = []
    segment = raw[1:]
    consumed = 0
    while True:
        continued = False
        index = 0
        while index < len(segment):
            char = segment[index]
            if char == "\\":
                if index + 1 == len(segment):
                    continued = True
                    break
                following = segment[index + 1]
                if following in DOUBLE_QUOTE_ESCAPES:
                    chunks.append(following)
                else:
                    chunks.append(char + following)
                index += 2
                continue
            if char == '"':
                return "".join(chunks), consumed
            chunks.append(char)
            index += 1

        line_index = next_index + consumed
        if line_index >= len(lines):
            return None, 0
        if not continued:
            chunks.append("\n")
        segment = lines[line_index]
        consumed += 1


def parse_env_text(text: str) -> dict[str, str]:
    """Parse assignments from ``text``; later assignments win, like ``source``."""
    values: dict[str, str] = {}
    lines = text.split("\n")
    index = 0
    while index < len(lines):
        raw_line = lines[index]
        line = raw_line.rstrip("\r")
        index += 1
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = ASSIGNMENT_PATTERN.match(line)
        if match is None:
            continue

        name, raw = match.group(1), match.group(2)
        value: Optional[str]
        if raw.startswith('"'):
            # Keep a trailing CR when the quoted value runs onto the next line.
            quoted = raw_line[match.start(2) :]
            value, consumed = _parse_double_quoted(quoted, lines, index)
            index += consumed
        elif raw.startswith("'"):
            value = _parse_single_quoted(raw)
        else:
            value = None
        if value is None:
            value = _parse_bare(raw)
        values[name] = value
    return values


def render_env_text(header: list[str], exports: Mapping[str, str]) -> str:
    lines = list(header)
    for name, value in exports.items():
        lines.append(format_export(name, value))
    lines.append("")
    return "\n".join(lines)
