from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from app.api.deps import check_role, get_post_repository
from app.api.errors import internal_error
from app.api.validation import parse_id, validate_post_create, validate_post_update
from app.core.errors import BadRequest, NotFound
from app.models.user import UserType
from app.repositories import PostRepository
from app.schemas import PostMessageOut, PostOut, UserOut

router = APIRouter(prefix="/posts", tags=["posts"])

INVALID_ID = "ID de post inválido."

only_professor = check_role(UserType.PROFESSOR)


# ----------------------------
# Leitura (pública)
# ----------------------------
@router.get("", response_model=list[PostOut])
def list_posts(posts: PostRepository = Depends(get_post_repository)):
    with internal_error("Falha interna ao buscar posts."):
        return [PostOut.model_validate(p) for p in posts.find_all()]


@router.get("/search", response_model=list[PostOut])
def search_posts(
    termo: Optional[str] = Query(None, description="Palavra-chave buscada no título ou conteúdo"),
    posts: PostRepository = Depends(get_post_repository),
):
    if not termo or not termo.strip():
        raise BadRequest('O parâmetro de busca "termo" é obrigatório.')

    with internal_error("Falha interna ao buscar posts."):
        return [PostOut.model_validate(p) for p in posts.search(termo)]


@router.get("/{post_id}", response_model=PostOut)
def get_post(post_id: str, posts: PostRepository = Depends(get_post_repository)):
    pid = parse_id(post_id, INVALID_ID)

    with internal_error("Falha interna ao buscar o post."):
        post = posts.find_by_id(pid)
        if not post:
            raise NotFound("Post não encontrado.")
        return PostOut.model_validate(post)


# ----------------------------
# Escrita (somente PROFESSOR)
# ----------------------------
@router.post("", response_model=PostMessageOut, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: Any = Body(None),
    posts: PostRepository = Depends(get_post_repository),
    current_user: UserOut = Depends(only_professor),
):
    data = validate_post_create(payload)

    with internal_error("Falha interna ao criar o post."):
        post = posts.create({**data.model_dump(), "created_by_id": current_user.id})
        return PostMessageOut(message="Post criado com sucesso!", post=PostOut.model_validate(post))


@router.put("/{post_id}", response_model=PostMessageOut)
def update_post(
    post_id: str,
    payload: Any = Body(None),
    posts: PostRepository = Depends(get_post_repository),
    current_user: UserOut = Depends(only_professor),
):
    pid = parse_id(post_id, INVALID_ID)
    data = validate_post_update(payload)

    with internal_error("Falha interna ao atualizar o post."):
        post = posts.update(pid, {**data, "edited_by_id": current_user.id})
        if not post:
            raise NotFound("Post não encontrado para atualização.")
        return PostMessageOut(message="Post atualizado com sucesso.", post=PostOut.model_validate(post))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    posts: PostRepository = Depends(get_post_repository),
    current_user: UserOut = Depends(only_professor),
):
    pid = parse_id(post_id, INVALID_ID)

    with internal_error("Falha interna ao deletar o post."):
        if not posts.remove(pid):
            raise NotFound("Post não encontrado para exclusão.")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
