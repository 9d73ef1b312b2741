"""Small string helpers used by the configuration code."""

# Characters the C locale classifies as whitespace.
_WHITESPACE = " \t\n\v\f\r"


def split(s: str, delim: str) -> list[str]:
    """Split ``s`` on ``delim``.

    Empty fields between delimiters are kept, but a trailing empty field
    after a final delimiter is not, and an empty string yields no fields.
    """
    if len(delim) != 1:
        raise ValueError("delimiter must be a single character")
    parts = s.split(delim)
    if parts[-1] == "":
        parts.pop()
    return parts


def trim(s: str) -> str:
    """Return ``s`` without leading and trailing whitespace."""
    return s.strip(_WHITESPACE)