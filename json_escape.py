"""
json_escape.py - Quote and unquote string text.

Only the double quote and the backslash are ever escaped. There is no
escape-sequence table: a backslash is dropped and the character after it
is copied as-is, so ``\\n`` comes back as a plain ``n``.
"""


class UnescapeError(ValueError):
    """Quoted text is missing a delimiter or ends inside an escape."""


def escape(text: str) -> str:
    out = ['"']
    for ch in text:
        if ch == '"' or ch == "\\":
            out.append("\\")
        out.append(ch)
    out.append('"')
    return "".join(out)


def unescape(raw: str) -> str:
    """
    Strip the surrounding quotes from ``raw`` and resolve backslash escapes.

    Raises UnescapeError when ``raw`` is shorter than two characters, is
    not wrapped in double quotes, or its last interior character is an
    unpaired backslash.
    """
    if len(raw) < 2 or raw[0] != '"' or raw[-1] != '"':
        raise UnescapeError(f"not a quoted string: {raw[:20]!r}")

    out = []
    in_escape = False
    for ch in raw[1:-1]:
        if not in_escape and ch == "\\":
            in_escape = True
        else:
            in_escape = False
            out.append(ch)
    if in_escape:
        raise UnescapeError(f"trailing backslash in string: {raw[:20]!r}")
    return "".join(out)


__all__ = ["escape", "unescape", "UnescapeError"]
