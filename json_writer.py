"""
json_writer.py - Pretty-printer for value trees.

Output is a pure function of the tree. Keys are escaped; scalars are
emitted exactly as stored, so a scalar read from a quoted string still
carries its quotes.
"""

import io
from typing import TextIO

from json_escape import escape
from json_value import Value

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
INDENT_STEP = "   "     # three spaces per nesting level


def write(value: Value, sink: TextIO, indent: str = "") -> None:
    """Write ``value`` to ``sink``; ``indent`` is the current nesting prefix."""
    if value.is_dict or value.is_list:
        opener, closer = ("{", "}") if value.is_dict else ("[", "]")
        sink.write(opener)
        if not len(value):
            sink.write(closer)
            return
        inner = indent + INDENT_STEP
        if value.is_dict:
            entries = ((escape(k) + ": ", v) for k, v in value.items())
        else:
            entries = (("", v) for v in value.values())
        for i, (prefix, child) in enumerate(entries):
            if i:
                sink.write(",")
            sink.write("\n" + inner + prefix)
            write(child, sink, inner)
        sink.write("\n" + indent + closer)
        return

    sink.write(value.text)


def to_text(value: Value, indent: str = "") -> str:
    buf = io.StringIO()
    write(value, buf, indent)
    return buf.getvalue()


__all__ = ["write", "to_text", "INDENT_STEP"]
