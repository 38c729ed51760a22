import os

# precisa vir antes de qualquer import de `app` (settings é lido no import)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "segredo-de-teste-com-pelo-menos-32-bytes"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.lifecycle import Lifecycle
from app.core.security import issue_token
from app.db.session import SessionLocal, engine
from app.db.tables import metadata
from app.main import app
from app.models.user import UserType
from app.repositories import PostRepository, UserRepository

PASSWORD = "senha123"


# =============================================================================
# Banco
# =============================================================================


@pytest.fixture(autouse=True)
def database():
    """Schema novo (sqlite em memória) a cada teste."""
    metadata.create_all(engine)
    yield
    metadata.drop_all(engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_user(email: str, user_type: UserType = UserType.ALUNO, nome: str = "Usuário Teste"):
    session = SessionLocal()
    try:
        user = UserRepository(session).create(
            {"nome": nome, "email": email, "password": PASSWORD, "user_type": user_type}
        )
        return user.id
    finally:
        session.close()


def create_post(author_id: int, title: str = "Título de Teste do Post", content: str = "Conteúdo do post de teste."):
    session = SessionLocal()
    try:
        post = PostRepository(session).create(
            {"title": title, "content": content, "created_by_id": author_id}
        )
        return post.id
    finally:
        session.close()


def bearer(user_id: int, email: str, user_type: UserType) -> dict:
    token = issue_token({"id": user_id, "user_type": user_type, "email": email})
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Usuários prontos
# =============================================================================


@pytest.fixture
def professor():
    email = "post.author@escola.com"
    user_id = create_user(email, UserType.PROFESSOR, nome="Post Author")
    return {"id": user_id, "email": email, "headers": bearer(user_id, email, UserType.PROFESSOR)}


@pytest.fixture
def aluno():
    email = "aluno@escola.com"
    user_id = create_user(email, UserType.ALUNO, nome="Aluno")
    return {"id": user_id, "email": email, "headers": bearer(user_id, email, UserType.ALUNO)}


# =============================================================================
# Cliente HTTP
# =============================================================================


@pytest_asyncio.fixture
async def client():
    app.state.lifecycle = Lifecycle.READY
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
