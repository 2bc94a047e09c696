"""JWT verification service."""

import time
from typing import Any

from authlib.jose import JoseError, JsonWebToken
from fastapi import HTTPException
from loguru import logger

from library_catalog.runtime.context import get_config


def _as_list(v):
    return [v] if isinstance(v, str) else list(v or ())


class JwtVerificationService:
    def verify_jwt(
        self,
        token: str,
        *,
        key: str | None = None,
        expected_audience: list[str] | str | None = None,
        expected_issuer: str | None = None,
    ) -> dict[str, Any]:
        """Verify a token issued by this API and return its claims.

        Raises:
            HTTPException: 401 when the token is malformed, forged, expired or
                meant for another issuer or audience.
        """
        cfg = get_config()

        verification_key = key or cfg.jwt.signing_secret
        if not verification_key:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        aud_values = _as_list(expected_audience or cfg.jwt.audiences)
        if not aud_values:
            raise HTTPException(status_code=401, detail="No expected audience configured")

        claims_options = {
            "iss": {"essential": True, "values": [expected_issuer or cfg.jwt.gen_issuer]},
            "aud": {"essential": True, "values": aud_values},
            "sub": {"essential": True},
        }

        try:
            # Only the configured algorithm is accepted
            claims = JsonWebToken([cfg.jwt.algorithm]).decode(
                token, verification_key, claims_options=claims_options
            )
            claims.validate(leeway=cfg.jwt.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Rejected bearer token: {}", exc)
            raise HTTPException(status_code=401, detail=f"JWT error: {exc}") from exc

        now = int(time.time())
        for k, check in (
            ("exp", lambda v: now > int(v) + cfg.jwt.clock_skew),
            ("nbf", lambda v: now < int(v) - cfg.jwt.clock_skew),
            ("iat", lambda v: int(v) > now + cfg.jwt.clock_skew),
        ):
            v = claims.get(k)
            if v is not None and check(v):
                raise HTTPException(status_code=401, detail=f"Invalid {k} with skew")

        return dict(claims)
