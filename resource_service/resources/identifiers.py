"""Translation between external resource ids and internal primary keys."""

import re

# SQLite INTEGER PRIMARY KEY is a signed 64-bit rowid
MAX_KEY = 2**63 - 1

_DECIMAL_ID = re.compile(r"[0-9]+")


def encode_id(key: int) -> str:
    """Render an internal key as its external decimal string."""
    return str(key)


def decode_id(external_id: object) -> int | None:
    """Parse an external id into an internal key.

    Anything other than a string of ASCII digits naming a key in the
    rowid range yields None, which callers treat exactly like a missing
    record.
    """
    if not isinstance(external_id, str) or not _DECIMAL_ID.fullmatch(external_id):
        return None
    key = int(external_id)
    if key < 1 or key > MAX_KEY:
        return None
    return key
