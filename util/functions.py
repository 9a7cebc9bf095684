# util/functions.py
import uuid
from datetime import datetime, timezone

# Fixed namespace so the same body text always yields the same key.
EMAIL_BODY_UUID_NAMESPACE = uuid.UUID("6f1c9a52-3d1e-5b7a-9c4e-2a8d0b7f4e11")


def utc_iso_now() -> str:
    """Current UTC timestamp in ISO-8601 with trailing Z."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def body_uuid(body: str) -> str:
    return str(uuid.uuid5(EMAIL_BODY_UUID_NAMESPACE, body))


def lex_successor(prefix: str) -> str | None:
    """
    Smallest string greater than every string starting with `prefix`.
    Returns None when no such bound exists (empty prefix or all max code points).
    """
    chars = list(prefix)
    while chars:
        last = ord(chars.pop())
        if last < 0x10FFFF:
            nxt = last + 1
            # Surrogates cannot be encoded to UTF-8; jump past them.
            if 0xD800 <= nxt <= 0xDFFF:
                nxt = 0xE000
            return "".join(chars) + chr(nxt)
    return None
