import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from fastapi import HTTPException

from library_catalog.runtime.config.config_data import ConfigData
from library_catalog.runtime.context import get_config


class JwtGeneratorService:
    """Service for generating the bearer tokens handed out by /users/authenticate."""

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        issuer: str | None = None,
        audience: str | list[str] | None = None,
        include_jti: bool = True,
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT token for API authentication using authlib.

        Args:
            subject: Subject (sub) claim - the user id
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime in seconds (defaults to config)
            issuer: Issuer (iss) claim (defaults to config issuer)
            audience: Audience (aud) claim (defaults to config audiences)
            include_jti: Whether to include a unique JWT ID claim (default: True)
            secret: Optional secret key for signing. If None, will use config secret.

        Returns:
            Signed JWT token string

        Raises:
            HTTPException: If the signing secret is missing or encoding fails
        """
        config: ConfigData = get_config()

        secret = secret or config.jwt.signing_secret
        if not secret:
            raise HTTPException(
                status_code=500, detail="JWT signing secret not configured"
            )

        now = int(time.time())
        lifetime = expires_in_seconds or config.jwt.expires_in_seconds
        payload: dict[str, Any] = {
            "iss": issuer or config.jwt.gen_issuer,
            "sub": subject,
            "aud": audience or config.jwt.audiences,
            "exp": now + lifetime,
            "iat": now,
            "nbf": now,
        }

        if include_jti:
            payload["jti"] = generate_token(16)

        # Registered claims always win over caller supplied ones
        if claims:
            payload.update(
                {
                    k: v
                    for k, v in claims.items()
                    if k not in {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}
                }
            )

        try:
            header = {"alg": config.jwt.algorithm, "typ": "JWT"}
            token = jwt.encode(header, payload, secret)
            return token.decode() if isinstance(token, bytes) else token
        except JoseError as e:
            raise HTTPException(
                status_code=500, detail=f"JWT encoding failed: {str(e)}"
            ) from e

    def generate_access_token(
        self, user_id: int, roles: list[str] | None = None, **extra_claims
    ) -> str:
        """Generate an access token for a catalog user.

        Example:
            token = generate_access_token(user_id=1, roles=["EMPLOYEE", "ADMIN"])
        """
        claims: dict[str, Any] = dict(extra_claims)
        if roles:
            claims["roles"] = roles
        return self.generate_jwt(subject=str(user_id), claims=claims)
