"""
Mapeamento central de falhas -> resposta HTTP.

Todo erro que escapa de uma rota termina aqui e sai no formato
`{"status": "error", "message": ..., "errors": [...]}`. Erros 4xx passam a
mensagem (e os detalhes) adiante; erros 5xx só mostram a mensagem real em
desenvolvimento.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.validation import format_errors
from app.core.config import settings
from app.core.errors import AppError, InternalError, InvalidInput

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Erro interno do servidor."


def error_body(message: str, errors: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    return body


def error_response(
    status_code: int,
    message: str,
    errors: Optional[List[Dict[str, Any]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    if 400 <= status_code < 500:
        logger.warning("Erro %s: %s", status_code, message)
        return JSONResponse(status_code=status_code, content=error_body(message, errors), headers=headers)

    logger.error("Erro %s: %s", status_code, message)
    if not settings.is_development:
        message = GENERIC_SERVER_ERROR
    return JSONResponse(status_code=status_code, content=error_body(message), headers=headers)


@contextmanager
def internal_error(message: str) -> Iterator[None]:
    """
    Deixa erros de domínio passarem e converte qualquer outra falha em
    InternalError(message), registrando o traceback no log.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        logger.exception(message)
        raise InternalError(message) from exc


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.details, exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # corpo que nem chegou a ser JSON válido, query/path com tipo errado etc.
    return error_response(400, InvalidInput.message, format_errors(exc.errors(), skip=1))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erro não tratado em %s %s", request.method, request.url.path)
    return error_response(500, str(exc) or GENERIC_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
