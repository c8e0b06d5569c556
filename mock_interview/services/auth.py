# mock_interview/services/auth.py
# Bearer 토큰(JWT) 검증과 인증 주체(Principal) 정의
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict
from jose import JWTError, jwt
from mock_interview.config import settings
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """인증된 사용자. 서비스 계층은 current_user_id() 만 사용한다."""
    user_id: int
    email: str | None = None

    def current_user_id(self) -> int:
        return self.user_id


def create_access_token(user_id: int, email: str | None = None, minutes: int = 60) -> str:
    # Access Token 생성 (sub = users.id)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_bearer(authorization: str | None) -> Dict[str, str | None]:
    if not authorization:
        raise ValueError("missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise ValueError("invalid Authorization header")

    token = parts[1].strip()
    if not token:
        raise ValueError("invalid Authorization header")

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_aud": False},
        )
    except JWTError as e:
        logger.warning("JWT decode failed: %s", e)
        raise ValueError("invalid token") from e

    if claims.get("type", "access") != "access":
        raise ValueError("access token required")

    user_id = claims.get("sub")
    if not user_id:
        raise ValueError("invalid token: missing sub")

    return {
        "user_id": user_id,
        "email": claims.get("email"),
    }


def principal_from_header(authorization: str | None) -> Principal | None:
    """
    Authorization 헤더 -> Principal.
    헤더가 없으면 None (인증 필요 여부는 서비스가 판단), 형식/서명이 잘못되면 ValueError.
    """
    if not authorization:
        return None

    claims = verify_bearer(authorization)
    try:
        user_id = int(claims["user_id"])
    except (TypeError, ValueError) as e:
        raise ValueError("invalid token: sub is not a user id") from e

    return Principal(user_id=user_id, email=claims.get("email"))
