"""
Field normalization for connection string records.

Responsibilities:
- endpoint canonicalization to "<scheme>://<host>"
- whitespace trimming of the simple string fields
- decoding uploaded connection string files to text
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from charset_normalizer import from_bytes

from . import errors, rules


def normalize_endpoint(raw: Optional[str], param_name: str = "endpoint") -> str:
    """
    Canonicalize an endpoint to "<scheme>://<host>".

    Rules:
    - Blank input is rejected.
    - A value without any "." is rejected; it cannot be a fully qualified host.
    - The scheme is kept when the value carries one ("sb://..."), otherwise
      the default "amqps" scheme is used.
    - Only the host survives; user info, port, path, query and fragment are dropped.
    """
    if raw is None:
        raise errors.argument_null(param_name)
    if not raw.strip():
        raise errors.argument_null_or_white_space(param_name)
    if "." not in raw:
        raise errors.argument(param_name, rules.ENDPOINT_NOT_FULLY_QUALIFIED)

    value = raw.strip()
    has_scheme = "://" in value
    try:
        parts = urlsplit(value if has_scheme else "//" + value)
        host = parts.hostname
    except ValueError as exc:
        raise errors.argument(param_name, f"Endpoint could not be parsed: {exc}") from exc

    if not host:
        raise errors.argument(param_name, rules.ENDPOINT_NOT_FULLY_QUALIFIED)

    scheme = parts.scheme if has_scheme and parts.scheme else rules.ENDPOINT_SCHEME
    return f"{scheme}://{host}"


def normalize_simple_field(raw: Optional[str], param_name: str) -> str:
    """Trim surrounding whitespace; None is rejected."""
    if raw is None:
        raise errors.argument_null(param_name)
    return raw.strip()


def decode_text(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed rather than kept as text.
    - If decode fails, fall back to UTF-8, then to UTF-8 with replacement characters.
    - Newlines are normalized to LF and surrounding whitespace is stripped.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        decode_fallback = True

    text = text.replace("\r\n", "\n").replace("\r", "\n").strip()

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report
