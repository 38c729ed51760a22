from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.exc import IntegrityError

from app.api.deps import get_current_user, get_user_repository
from app.api.errors import internal_error
from app.api.validation import parse_id, validate_user_create, validate_user_update
from app.core.errors import Conflict, NotFound
from app.repositories import UserRepository
from app.schemas import UserMessageOut, UserOut

router = APIRouter(prefix="/users", tags=["users"])

INVALID_ID = "ID de usuário inválido."
EMAIL_IN_USE = "O email fornecido já está em uso."


@router.post("/register", response_model=UserMessageOut, status_code=status.HTTP_201_CREATED)
def register_user(payload: Any = Body(None), users: UserRepository = Depends(get_user_repository)):
    data = validate_user_create(payload)

    with internal_error("Falha interna ao registrar o usuário."):
        if users.find_by_email(data.email):
            raise Conflict(EMAIL_IN_USE)

        try:
            user = users.create(data.model_dump())
        except IntegrityError:
            # outro registro com o mesmo email passou na frente
            raise Conflict(EMAIL_IN_USE) from None

        return UserMessageOut(
            message="Usuário registrado com sucesso!",
            user=UserOut.model_validate(user),
        )


@router.get("", response_model=list[UserOut])
def list_users(users: UserRepository = Depends(get_user_repository), current_user=Depends(get_current_user)):
    with internal_error("Falha interna ao listar usuários."):
        return [UserOut.model_validate(u) for u in users.find_all()]


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, users: UserRepository = Depends(get_user_repository), current_user=Depends(get_current_user)):
    uid = parse_id(user_id, INVALID_ID)

    with internal_error("Falha interna ao buscar usuário."):
        user = users.find_by_id(uid)
        if not user:
            raise NotFound("Usuário não encontrado.")
        return UserOut.model_validate(user)


@router.put("/{user_id}", response_model=UserMessageOut)
def update_user(
    user_id: str,
    payload: Any = Body(None),
    users: UserRepository = Depends(get_user_repository),
    current_user=Depends(get_current_user),
):
    uid = parse_id(user_id, INVALID_ID)
    data = validate_user_update(payload)

    with internal_error("Falha interna ao atualizar usuário."):
        if "email" in data:
            owner = users.find_by_email(data["email"])
            if owner and owner.id != uid:
                raise Conflict(EMAIL_IN_USE)

        try:
            user = users.update(uid, data)
        except IntegrityError:
            raise Conflict(EMAIL_IN_USE) from None

        if not user:
            raise NotFound("Usuário não encontrado para atualização.")

        return UserMessageOut(message="Usuário atualizado com sucesso.", user=UserOut.model_validate(user))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, users: UserRepository = Depends(get_user_repository), current_user=Depends(get_current_user)):
    uid = parse_id(user_id, INVALID_ID)

    with internal_error("Falha interna ao deletar usuário."):
        if not users.remove(uid):
            raise NotFound("Usuário não encontrado para exclusão.")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
