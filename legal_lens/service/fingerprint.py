import hashlib
import random
import string
import time

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def content_hash(file_bytes: bytes) -> str:
    """MD5 hex digest of the uploaded bytes, used for duplicate detection."""
    return hashlib.md5(file_bytes).hexdigest()


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_document_id(timestamp_ms: int | None = None) -> str:
    """Return an id like ``doc_lx2k9f3a_4h7qz``: base36 millisecond time plus a random suffix."""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    suffix = "".join(random.choices(_BASE36_DIGITS, k=5))
    return f"doc_{to_base36(timestamp_ms)}_{suffix}"
