from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.security import verify_password
from app.db.session import SessionLocal
from app.repositories import UserRepository
from tests.conftest import PASSWORD

REGISTER_PAYLOAD = {
    "nome": "Exemplo de Usuário",
    "email": "usuario.exemplo@escola.com",
    "password": "senha123",
    "user_type": "ALUNO",
    "serie": "5ª série",
}


def stored_user(email):
    session = SessionLocal()
    try:
        return UserRepository(session).find_by_email(email)
    finally:
        session.close()


def assert_sanitized(user_json):
    assert "password" not in user_json
    assert "password_hash" not in user_json


class TestRegister:
    async def test_success(self, client):
        response = await client.post("/users/register", json=REGISTER_PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Usuário registrado com sucesso!"
        assert body["user"]["email"] == REGISTER_PAYLOAD["email"]
        assert body["user"]["user_type"] == "ALUNO"
        assert body["user"]["serie"] == "5ª série"
        assert_sanitized(body["user"])
        assert "senha123" not in response.text

        user = stored_user(REGISTER_PAYLOAD["email"])
        assert user.password_hash != "senha123"
        assert verify_password("senha123", user.password_hash)

    async def test_duplicate_email(self, client):
        first = await client.post("/users/register", json=REGISTER_PAYLOAD)
        second = await client.post("/users/register", json={**REGISTER_PAYLOAD, "nome": "Outro"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["message"] == "O email fornecido já está em uso."

    async def test_validation_errors(self, client):
        response = await client.post(
            "/users/register",
            json={"nome": "", "email": "invalido", "password": "123"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Dados de entrada inválidos."
        assert [e["path"] for e in body["errors"]] == ["nome", "email", "password"]

    async def test_registered_user_can_login(self, client):
        await client.post("/users/register", json=REGISTER_PAYLOAD)

        response = await client.post(
            "/auth/login",
            json={"email": REGISTER_PAYLOAD["email"], "password": REGISTER_PAYLOAD["password"]},
        )

        assert response.status_code == 200


class TestReadUsers:
    async def test_list(self, client, professor, aluno):
        response = await client.get("/users", headers=professor["headers"])

        assert response.status_code == 200
        users = response.json()
        assert [u["id"] for u in users] == [professor["id"], aluno["id"]]
        for user in users:
            assert_sanitized(user)

    async def test_get_by_id(self, client, professor, aluno):
        response = await client.get(f"/users/{aluno['id']}", headers=professor["headers"])

        assert response.status_code == 200
        assert response.json()["email"] == aluno["email"]
        assert_sanitized(response.json())

    async def test_get_not_found(self, client, professor):
        response = await client.get("/users/9999", headers=professor["headers"])

        assert response.status_code == 404
        assert response.json()["message"] == "Usuário não encontrado."

    async def test_get_malformed_id(self, client, professor):
        response = await client.get("/users/abc", headers=professor["headers"])

        assert response.status_code == 400
        assert response.json()["message"] == "ID de usuário inválido."

    async def test_get_id_beyond_integer_column(self, client, professor):
        response = await client.get("/users/99999999999999999999", headers=professor["headers"])

        assert response.status_code == 400
        assert response.json()["message"] == "ID de usuário inválido."

    async def test_requires_auth(self, client, aluno):
        response = await client.get(f"/users/{aluno['id']}")

        assert response.status_code == 401


class TestUpdateUser:
    async def test_partial_update(self, client, aluno):
        response = await client.put(
            f"/users/{aluno['id']}",
            json={"nome": "Novo Nome", "subject": "Português"},
            headers=aluno["headers"],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Usuário atualizado com sucesso."
        assert body["user"]["nome"] == "Novo Nome"
        assert body["user"]["subject"] == "Português"
        assert body["user"]["email"] == aluno["email"]
        assert_sanitized(body["user"])

    async def test_password_change(self, client, aluno):
        response = await client.put(
            f"/users/{aluno['id']}", json={"password": "nova-senha"}, headers=aluno["headers"]
        )
        assert response.status_code == 200
        assert "nova-senha" not in response.text

        old = await client.post("/auth/login", json={"email": aluno["email"], "password": PASSWORD})
        new = await client.post("/auth/login", json={"email": aluno["email"], "password": "nova-senha"})
        assert old.status_code == 401
        assert new.status_code == 200

    async def test_email_taken_by_someone_else(self, client, aluno, professor):
        response = await client.put(
            f"/users/{aluno['id']}", json={"email": professor["email"]}, headers=aluno["headers"]
        )

        assert response.status_code == 409

    async def test_keeping_own_email_is_fine(self, client, aluno):
        response = await client.put(
            f"/users/{aluno['id']}", json={"email": aluno["email"]}, headers=aluno["headers"]
        )

        assert response.status_code == 200

    async def test_no_fields(self, client, aluno):
        response = await client.put(f"/users/{aluno['id']}", json={}, headers=aluno["headers"])

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"path": "", "message": "Nenhum dado válido fornecido para atualização."}
        ]

    async def test_not_found(self, client, aluno):
        response = await client.put("/users/9999", json={"nome": "X"}, headers=aluno["headers"])

        assert response.status_code == 404
        assert response.json()["message"] == "Usuário não encontrado para atualização."

    async def test_malformed_id(self, client, aluno):
        response = await client.put("/users/xyz", json={"nome": "X"}, headers=aluno["headers"])

        assert response.status_code == 400


class TestDeleteUser:
    async def test_delete(self, client, professor, aluno):
        response = await client.delete(f"/users/{aluno['id']}", headers=professor["headers"])

        assert response.status_code == 204
        assert response.content == b""

        again = await client.get(f"/users/{aluno['id']}", headers=professor["headers"])
        assert again.status_code == 404

    async def test_delete_cascades_posts(self, client, professor, aluno):
        created = await client.post(
            "/posts", json={"title": "A", "content": "B"}, headers=professor["headers"]
        )
        post_id = created.json()["post"]["id"]

        response = await client.delete(f"/users/{professor['id']}", headers=aluno["headers"])

        assert response.status_code == 204
        assert (await client.get(f"/posts/{post_id}")).status_code == 404

    async def test_not_found(self, client, professor):
        response = await client.delete("/users/9999", headers=professor["headers"])

        assert response.status_code == 404
        assert response.json()["message"] == "Usuário não encontrado para exclusão."

    async def test_malformed_id(self, client, professor):
        response = await client.delete("/users/abc", headers=professor["headers"])

        assert response.status_code == 400


class TestInternalErrors:
    async def test_database_failure_is_masked(self, client, professor, monkeypatch):
        def boom(self):
            raise SQLAlchemyError("conexão perdida com 10.0.0.5")

        monkeypatch.setattr(UserRepository, "find_all", boom)

        response = await client.get("/users", headers=professor["headers"])

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Erro interno do servidor."}
        assert "10.0.0.5" not in response.text

    async def test_development_shows_operation_message(self, client, professor, monkeypatch):
        def boom(self):
            raise SQLAlchemyError("conexão perdida")

        monkeypatch.setattr(UserRepository, "find_all", boom)
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")

        response = await client.get("/users", headers=professor["headers"])

        assert response.status_code == 500
        assert response.json()["message"] == "Falha interna ao listar usuários."
