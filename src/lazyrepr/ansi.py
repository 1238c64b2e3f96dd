"""
Terminal helpers: color codes, escape filtering, pluralisation.
"""

import re

ANSI_NORMAL = "\x1b[0m"
ANSI_FAINT = "\x1b[2m"
ANSI_RED = "\x1b[31;1m"
ANSI_GREEN = "\x1b[32;1m"
ANSI_BLUE = "\x1b[34;1m"
ANSI_MAGENTA = "\x1b[35;1m"
ANSI_CYAN = "\x1b[36;1m"

# CSI sequences (ESC [ ... final), OSC sequences (ESC ] ... BEL or ESC \),
# and any other two-character escape.
_ANSI_ESCAPE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)?"
    r"|\x1b[@-Z\\-_]?"
)


def filter_ansi_escapes(text: str) -> str:
    """Strip terminal escape sequences and carriage returns from text."""
    return _ANSI_ESCAPE.sub("", text).replace("\r", "")


def pluralize(count: int, single: str, plural: str) -> str:
    """'1 item', '2 items'."""
    return f"{count} {single if count == 1 else plural}"
