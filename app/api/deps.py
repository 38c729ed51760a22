import logging
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.errors import Forbidden, InternalError, TokenExpired, TokenInvalid, Unauthorized
from app.core.security import verify_token
from app.db.session import get_db
from app.models.user import UserType
from app.repositories import PostRepository, UserRepository
from app.schemas import UserOut

logger = logging.getLogger(__name__)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_post_repository(db: Session = Depends(get_db)) -> PostRepository:
    return PostRepository(db)


def get_current_user(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
) -> UserOut:
    """
    Valida o `Authorization: Bearer <token>`, carrega o usuário do token e o
    deixa em `request.state.user` (sem o hash da senha).
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise Unauthorized("Token de autenticação ausente.")

    parts = auth_header.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise Unauthorized("Formato do token inválido (Esperado: Bearer <token>).")

    try:
        payload = verify_token(token)
    except TokenExpired:
        raise Unauthorized("Token expirado.") from None
    except TokenInvalid:
        raise Unauthorized("Token inválido.") from None

    try:
        user = users.find_by_id(payload["id"])
    except Exception as exc:
        logger.exception("Erro no middleware de autenticação")
        raise InternalError("Falha interna na autenticação.") from exc

    if not user:
        raise Unauthorized("Usuário associado ao token não encontrado.")

    current_user = UserOut.model_validate(user)
    request.state.user = current_user
    return current_user


def check_role(*allowed_types: UserType) -> Callable[..., UserOut]:
    """
    Uso: `current_user = Depends(check_role(UserType.PROFESSOR))`.
    Depende de get_current_user, então a autenticação sempre roda antes.
    """
    allowed = frozenset(allowed_types)

    def role_guard(current_user: UserOut = Depends(get_current_user)) -> UserOut:
        if current_user.user_type not in allowed:
            raise Forbidden("Acesso negado. Você não tem permissão para esta ação.")
        return current_user

    return role_guard
