from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_user_repository
from app.api.errors import internal_error
from app.api.validation import validate_login
from app.core.errors import Unauthorized
from app.core.security import issue_token
from app.repositories import UserRepository
from app.schemas import LoginOut

router = APIRouter(prefix="/auth", tags=["auth"])

# mesma mensagem para email desconhecido e senha errada
INVALID_CREDENTIALS = "Credenciais inválidas."


@router.post("/login", response_model=LoginOut)
def login(payload: Any = Body(None), users: UserRepository = Depends(get_user_repository)):
    credentials = validate_login(payload)

    with internal_error("Falha interna ao realizar o login."):
        user = users.find_by_email(credentials.email)
        if not user or not users.compare_password(credentials.password, user.password_hash):
            raise Unauthorized(INVALID_CREDENTIALS)

        token = issue_token({"id": user.id, "user_type": user.user_type, "email": user.email})

    return LoginOut(token=token, user_type=user.user_type, id=user.id, nome=user.nome)
