from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Falha de domínio que já sabe qual status HTTP representa."""

    status_code = 500
    message = "Erro interno do servidor."

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.message
        self.details = details
        self.headers = headers
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = 400
    message = "Requisição inválida."


class InvalidInput(BadRequest):
    message = "Dados de entrada inválidos."


class Unauthorized(AppError):
    status_code = 401
    message = "Não autorizado."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    status_code = 403
    message = "Acesso negado. Você não tem permissão para esta ação."


class NotFound(AppError):
    status_code = 404
    message = "Recurso não encontrado."


class Conflict(AppError):
    status_code = 409
    message = "Conflito com o estado atual do recurso."


class InternalError(AppError):
    status_code = 500


# token service
class TokenError(Exception):
    pass


class TokenExpired(TokenError):
    pass


class TokenInvalid(TokenError):
    pass
