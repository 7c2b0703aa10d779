"""Secure-link signing for the edge tier.

The edge proxy validates each segment request by recomputing::

    md5("{expires}{uri}{remote_addr} {secret}")

and comparing the URL-safe, unpadded Base64 form against the ``sig`` query
parameter. ``remote_addr`` is only part of the expression when IP binding is
enabled on both sides. Any byte of difference here means every request is
rejected at the edge, so the layout is pinned by tests. ``uri`` is the
decoded request path; links carry it percent-encoded.

MD5 is required by the edge proxy's secure-link module; it is not used here
as a general purpose MAC.
"""
import base64
import hashlib
import hmac
import time
from typing import Optional
from urllib.parse import quote, urlencode

__all__ = ["signing_input", "sign", "build_url", "verify"]


def signing_input(expires: int, path: str, secret: str, client_ip: Optional[str] = None) -> str:
    """Canonical string hashed by both the issuer and the edge validator."""
    return f"{int(expires)}{path}{client_ip or ''} {secret}"


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def sign(expires: int, path: str, secret: str, client_ip: Optional[str] = None) -> str:
    """Return the URL-safe Base64 MD5 signature for ``path`` valid until ``expires``."""
    if not secret:
        raise ValueError("signing secret is empty")
    if not path.startswith("/"):
        raise ValueError(f"path must start with '/': {path!r}")
    payload = signing_input(expires, path, secret, client_ip).encode("utf-8")
    return _b64url(hashlib.md5(payload).digest())


def build_url(edge_base_url: str, path: str, signature: str, expires: int) -> str:
    base = edge_base_url.rstrip("/")
    query = urlencode({"sig": signature, "expires": int(expires)})
    return f"{base}{quote(path)}?{query}"


def verify(
    path: str,
    sig: str,
    expires: int | str,
    secret: str,
    *,
    client_ip: Optional[str] = None,
    now: Optional[float] = None,
) -> bool:
    """Check a link the way the edge validator does.

    Returns False for a malformed expiry, an elapsed expiry, or a signature
    mismatch.
    """
    try:
        expires = int(expires)
    except (TypeError, ValueError):
        return False
    current = time.time() if now is None else now
    if current > expires:
        return False
    expected = sign(expires, path, secret, client_ip)
    return hmac.compare_digest(expected.encode("ascii"), (sig or "").encode("ascii", "replace"))
