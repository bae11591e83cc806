"""Signing and verification of HS256 bearer tokens.

Identities are issued by the identity provider; this service only checks
them. ``create_token`` exists for tests and operator scripts that need a
token for a known user id.

Verification is strict about the header (``alg`` must be HS256), the
issuer and the expiry, and lenient about nothing else: any failure yields
``None``.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ISSUER = "deckvault"
SUPPORTED_ALGORITHM = "HS256"

# Seconds of clock skew tolerated when checking expiry.
LEEWAY_SECONDS = 30


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims. ``sub`` is the user id."""
    sub: str
    exp: datetime
    issued_at: Optional[datetime] = None


def create_token(
    subject: str,
    secret: str,
    algorithm: str = SUPPORTED_ALGORITHM,
    expires_hours: float = 24,
) -> str:
    """Sign a token whose ``sub`` claim is *subject*.

    A negative *expires_hours* produces an already-expired token.
    """
    if algorithm != SUPPORTED_ALGORITHM:
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    issued = int(time.time())
    claims = {
        "sub": subject,
        "iss": ISSUER,
        "iat": issued,
        "exp": issued + int(expires_hours * 3600),
    }
    head_and_body = _segment({"alg": algorithm, "typ": "JWT"}) + b"." + _segment(claims)
    return (head_and_body + b"." + _urlsafe(_sign(head_and_body, secret))).decode("ascii")


def decode_token(
    token: str,
    secret: str,
    algorithm: str = SUPPORTED_ALGORITHM,
) -> Optional[TokenPayload]:
    """Return the verified claims of *token*, or ``None`` if it does not verify."""
    if algorithm != SUPPORTED_ALGORITHM or not token:
        return None

    try:
        head, body, signature = token.encode("ascii").split(b".")
        if not hmac.compare_digest(_sign(head + b"." + body, secret), _unurlsafe(signature)):
            return None
        header = _unsegment(head)
        claims = _unsegment(body)
    except (ValueError, TypeError, UnicodeError):
        return None

    if header.get("alg") != SUPPORTED_ALGORITHM:
        return None
    return _claims_to_payload(claims)


def _claims_to_payload(claims: Dict[str, Any]) -> Optional[TokenPayload]:
    subject = claims.get("sub")
    expires = claims.get("exp")
    if not subject or not isinstance(expires, (int, float)):
        return None
    if claims.get("iss") != ISSUER:
        return None
    if time.time() > expires + LEEWAY_SECONDS:
        return None

    issued = claims.get("iat")
    return TokenPayload(
        sub=str(subject),
        exp=datetime.fromtimestamp(expires, tz=timezone.utc),
        issued_at=(
            datetime.fromtimestamp(issued, tz=timezone.utc)
            if isinstance(issued, (int, float)) else None
        ),
    )


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def _segment(obj: Dict[str, Any]) -> bytes:
    return _urlsafe(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def _unsegment(raw: bytes) -> Dict[str, Any]:
    value = json.loads(_unurlsafe(raw))
    if not isinstance(value, dict):
        raise ValueError("token segment is not an object")
    return value


def _urlsafe(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def _unurlsafe(data: bytes) -> bytes:
    return base64.urlsafe_b64decode(data + b"=" * (-len(data) % 4))
