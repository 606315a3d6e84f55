"""Signed Token Identity — verifies bearer tokens issued by the external identity service.

Invariants:
    - Token format: <base64url(json payload)>.<base64url(HMAC-SHA256(payload))>
    - Payload carries "sub" (user id) and "of_age" (bool); anything else is ignored
    - resolve() never raises on bad input: invalid tokens resolve to None
    - Signature compared with hmac.compare_digest (constant time)

Design Decisions:
    - Shared-secret HMAC over a full JWT stack: the core only needs (sub, of_age)
      and never issues tokens itself; issue_token exists for local tooling and tests
"""

import base64
import hashlib
import hmac
import json
import logging

from ethos_guild.core.domain_types import UserId
from ethos_guild.core.repository_protocols import Identity

logger = logging.getLogger(__name__)


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    padding = "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(text + padding)


class SignedTokenIdentityProvider:
    """IdentityProvider backed by HMAC-signed bearer tokens."""

    def __init__(self, secret: str):
        self._secret = secret.encode("utf-8")

    def _sign(self, payload: bytes) -> str:
        return _b64encode(hmac.new(self._secret, payload, hashlib.sha256).digest())

    def issue_token(self, user_id: str, is_of_legal_age: bool) -> str:
        payload = json.dumps(
            {"sub": user_id, "of_age": is_of_legal_age}, separators=(",", ":"),
        ).encode("utf-8")
        return f"{_b64encode(payload)}.{self._sign(payload)}"

    def resolve(self, credential: str) -> Identity | None:
        try:
            encoded_payload, signature = credential.split(".", 1)
            payload = _b64decode(encoded_payload)
        except ValueError:
            return None
        if not hmac.compare_digest(
            self._sign(payload).encode("ascii"), signature.encode("utf-8"),
        ):
            logger.warning("Rejected bearer token with bad signature")
            return None
        try:
            claims = json.loads(payload)
        except ValueError:
            return None
        if not isinstance(claims, dict):
            return None
        sub = claims.get("sub")
        if not isinstance(sub, str) or not sub:
            return None
        return Identity(
            user_id=UserId(sub),
            is_of_legal_age=claims.get("of_age") is True,
        )
