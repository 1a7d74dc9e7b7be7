from typing import Optional

FALSE_VALUES = {'false', 'off', '0', 'no', ''}


def slow_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time independent of where they differ.

    The length mismatch is folded into the accumulator and every byte of the
    shorter input is visited, so the loop never exits early.
    """
    diff = len(a) ^ len(b)
    for x, y in zip(a, b):
        diff |= x ^ y
    return diff == 0


def sanitize_name(name: str) -> str:
    """HTML-escape the five reserved characters."""
    # '&' first, none of the replacements introduce new reserved characters
    return (
        name.replace('&', '&amp;')
        .replace('<', '&lt;')
        .replace('>', '&gt;')
        .replace('"', '&quot;')
        .replace("'", '&#39;')
    )


def parse_flag(value) -> Optional[bool]:
    """Parse an optional checkbox value from a submitted form.

    Returns None when the field was not sent at all.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    # A checked box sends its value attribute, browsers default to "on"
    return str(value).strip().lower() not in FALSE_VALUES
