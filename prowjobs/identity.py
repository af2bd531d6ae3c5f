"""
Identity generation for ProwJob records.

Every record needs a name that is unique across all concurrent callers
and valid as a Kubernetes object name (lower-case alphanumerics), since
the pod that runs the record shares it. ULIDs fit:

- 48 bits of timestamp (milliseconds since Unix epoch)
- 80 bits of randomness

encoded in Crockford base32 and lower-cased, 26 characters, sorting
by creation time.

Generation is isolated behind IdentityGenerator (a zero-argument callable
returning a name) so tests and replays can inject deterministic ids.
"""

import secrets
import time
from typing import Callable

IdentityGenerator = Callable[[], str]

# Crockford's Base32 alphabet (excludes i, l, o, u), lower-cased
_ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"


def generate_ulid() -> str:
    """
    Generate a lower-case ULID.

    Lexicographic order follows creation time at millisecond resolution.
    Ids generated within the same millisecond are unordered.
    """
    # Timestamp component (48 bits = 10 chars in base32)
    timestamp_ms = int(time.time() * 1000)
    timestamp_chars = []
    for _ in range(10):
        timestamp_chars.append(_ALPHABET[timestamp_ms & 0x1F])
        timestamp_ms >>= 5
    timestamp_part = "".join(reversed(timestamp_chars))

    # Random component (80 bits = 16 chars in base32)
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(16))

    return timestamp_part + random_part


def sequential_ids(prefix: str = "job") -> IdentityGenerator:
    """
    Deterministic IdentityGenerator yielding prefix-0001, prefix-0002, ...

    For tests and dry runs where stable names matter more than global
    uniqueness.

    Example:
        >>> gen = sequential_ids("pj")
        >>> gen(), gen()
        ('pj-0001', 'pj-0002')
    """
    counter = 0

    def next_id() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}-{counter:04d}"

    return next_id
