from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.errors import TokenExpired, TokenInvalid

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


# ----------------------------
# Senhas
# ----------------------------
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Nunca levanta erro: hash ausente ou corrompido conta como senha errada."""
    if not password or not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


# ----------------------------
# Tokens (JWT)
# ----------------------------
def issue_token(
    identity: Dict[str, Any],
    secret: Optional[str] = None,
    ttl_seconds: Optional[int] = None,
) -> str:
    """
    Gera um JWT assinado com as claims de identidade (id, user_type, email).
    Expira em JWT_EXPIRES_SECONDS (24h) se ttl_seconds não for informado.
    """
    now = datetime.now(timezone.utc)
    ttl = settings.JWT_EXPIRES_SECONDS if ttl_seconds is None else int(ttl_seconds)

    user_type = identity.get("user_type")
    body = {
        "id": identity["id"],
        "user_type": getattr(user_type, "value", user_type),
        "email": identity.get("email"),
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(body, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            secret or settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpired(str(exc)) from exc
    except jwt.InvalidTokenError as exc:
        raise TokenInvalid(str(exc)) from exc

    user_id = payload.get("id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise TokenInvalid("token sem id de usuário")
    return payload
