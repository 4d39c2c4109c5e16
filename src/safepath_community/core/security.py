"""Bearer token verification for the request-authorization gate.

Each request is decided in a single pass: either the token is accepted and an
identity is extracted, or the request is rejected with one of two fixed
messages. Verification details never leave this module.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from jose import JWTError, jwt

from safepath_community.core.settings import settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
NO_TOKEN_MESSAGE = "No token"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"

# Claims checked, in order, for the caller identity.
IDENTITY_CLAIMS = ("userId", "sub")


class GateState(Enum):
    """Terminal outcomes of the authorization gate."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class GateDecision:
    """Result of checking one Authorization header."""

    state: GateState
    user_id: str | None = None
    message: str | None = None

    @property
    def accepted(self) -> bool:
        return self.state is GateState.ACCEPTED

    @classmethod
    def accept(cls, user_id: str) -> GateDecision:
        return cls(state=GateState.ACCEPTED, user_id=user_id)

    @classmethod
    def reject(cls, message: str) -> GateDecision:
        return cls(state=GateState.REJECTED, message=message)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the raw token from an Authorization header value.

    Returns None when the header is absent or does not use the Bearer scheme.
    A header of exactly ``"Bearer "`` yields an empty token, which then fails
    verification rather than being treated as missing.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization.split(" ")[1]


def decode_identity(
    token: str,
    *,
    secret: str | None = None,
    algorithm: str | None = None,
) -> str:
    """Verify ``token`` and return the identity claim it carries.

    Raises:
        JWTError: If the signature, expiry or payload is invalid, or no
            identity claim is present.
    """
    payload = jwt.decode(
        token,
        secret or settings.jwt_access_secret,
        algorithms=[algorithm or settings.jwt_algorithm],
    )
    for claim in IDENTITY_CLAIMS:
        value = payload.get(claim)
        if value is not None and value != "":
            return str(value)
    raise JWTError("Token carries no identity claim")


def verify_authorization(
    authorization: str | None,
    *,
    secret: str | None = None,
    algorithm: str | None = None,
) -> GateDecision:
    """Run the authorization gate against a raw Authorization header."""
    token = extract_bearer_token(authorization)
    if token is None:
        return GateDecision.reject(NO_TOKEN_MESSAGE)

    try:
        user_id = decode_identity(token, secret=secret, algorithm=algorithm)
    except JWTError as exc:
        logger.warning("JWT verification error: %s", exc)
        return GateDecision.reject(INVALID_TOKEN_MESSAGE)

    return GateDecision.accept(user_id)
