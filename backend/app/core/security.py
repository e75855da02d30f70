from __future__ import annotations

from typing import Any

from jose import jwt

from app.core.config import get_settings


def decode_identity_token(token: str) -> dict[str, Any]:
    """Verify a token issued by the identity provider. Raises JWTError on failure."""
    settings = get_settings()
    options = {"verify_aud": settings.identity_jwt_audience is not None}
    return jwt.decode(
        token,
        settings.identity_jwt_secret,
        algorithms=[settings.identity_jwt_algorithm],
        audience=settings.identity_jwt_audience,
        issuer=settings.identity_jwt_issuer,
        options=options,
    )


def create_identity_token(claims: dict[str, Any]) -> str:
    """Mint a token the way the identity provider does; used by local tooling and tests."""
    settings = get_settings()
    payload = dict(claims)
    if settings.identity_jwt_issuer and "iss" not in payload:
        payload["iss"] = settings.identity_jwt_issuer
    if settings.identity_jwt_audience and "aud" not in payload:
        payload["aud"] = settings.identity_jwt_audience
    return jwt.encode(payload, settings.identity_jwt_secret, algorithm=settings.identity_jwt_algorithm)
