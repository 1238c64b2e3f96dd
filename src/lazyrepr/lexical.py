"""
Lexical quoting: identifiers, attribute names, string and boolean literals.

All functions write to `output`, any object with a `write(str)` method, and
return it so calls can be chained.
"""

from typing import FrozenSet, TextIO

from .ansi import ANSI_FAINT, ANSI_MAGENTA, ANSI_NORMAL, pluralize
from .options import UNLIMITED

# Keywords that must be quoted when used as attribute names. `or` is not
# here because `{ or = 1; }` parses.
RESERVED_KEYWORDS: FrozenSet[str] = frozenset({
    "if", "then", "else", "assert", "with", "let", "in", "rec", "inherit",
})

_IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_IDENT_CHARS = _IDENT_START | frozenset("0123456789'-")

_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def is_reserved_keyword(name: str) -> bool:
    """True if `name` needs quoting because it is a language keyword."""
    return name in RESERVED_KEYWORDS


def print_elided(output: TextIO, count: int, single: str, plural: str,
                 ansi_colors: bool = False) -> TextIO:
    """Write `«N things elided»`."""
    if ansi_colors:
        output.write(ANSI_FAINT)
    output.write("«")
    output.write(pluralize(count, single, plural))
    output.write(" elided»")
    if ansi_colors:
        output.write(ANSI_NORMAL)
    return output


def print_literal_string(output: TextIO, text: str, max_length: int = UNLIMITED,
                         ansi_colors: bool = False) -> TextIO:
    """
    Write `text` as a double-quoted string literal.

    `$` is escaped only before `{`, so the output never contains an
    interpolation. After `max_length` characters the literal is closed and
    the rest is summarised by its size in bytes.
    """
    if ansi_colors:
        output.write(ANSI_MAGENTA)
    output.write('"')
    for i, c in enumerate(text):
        if i >= max_length:
            output.write('" ')
            omitted = len(text[i:].encode("utf-8", "surrogatepass"))
            print_elided(output, omitted, "byte", "bytes", ansi_colors)
            return output

        escaped = _ESCAPES.get(c)
        if escaped is not None:
            output.write(escaped)
        elif c == "$" and text[i + 1:i + 2] == "{":
            output.write("\\$")
        else:
            output.write(c)
    output.write('"')
    if ansi_colors:
        output.write(ANSI_NORMAL)
    return output


def print_literal_bool(output: TextIO, boolean: bool) -> TextIO:
    output.write("true" if boolean else "false")
    return output


def print_identifier(output: TextIO, name: str) -> TextIO:
    """
    Write a name unquoted if it lexes as an identifier, else as a string
    literal. Keywords and the empty name are always quoted.
    """
    if not name:
        output.write('""')
    elif is_reserved_keyword(name):
        output.write(f'"{name}"')
    elif name[0] not in _IDENT_START or any(c not in _IDENT_CHARS for c in name):
        print_literal_string(output, name)
    else:
        output.write(name)
    return output


def is_var_name(name: str) -> bool:
    """True if `name` can be written as a bare attribute name."""
    if not name:
        return False
    if is_reserved_keyword(name):
        return False
    if name[0] in "0123456789-'":
        return False
    return all(c in _IDENT_CHARS for c in name)


def print_attribute_name(output: TextIO, name: str) -> TextIO:
    if is_var_name(name):
        output.write(name)
    else:
        print_literal_string(output, name)
    return output
