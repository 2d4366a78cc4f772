"""Record id and timestamp generation."""

import random
import string
import time
from datetime import UTC, datetime

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LEN = 9


def generate_id() -> str:
    """Return '<epoch-ms>-<9 random base36 chars>'; sortable by creation time to the millisecond."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LEN))
    return f"{int(time.time() * 1000)}-{suffix}"


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
