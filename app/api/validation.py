"""
Camada de validação de entrada.

Cada operação de escrita tem uma função `validate_*` que recebe o corpo cru
(o que veio no JSON) e devolve os dados já validados, ou levanta
`InvalidInput` com a lista completa de erros no formato
`[{"path": "campo", "message": "..."}]` (todos os erros, não só o primeiro).
"""
import re
from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import BadRequest, InvalidInput
from app.schemas import LoginIn, PostCreate, PostUpdate, UserCreate, UserUpdate

SchemaT = TypeVar("SchemaT", bound=BaseModel)

EMPTY_UPDATE_MESSAGE = "Nenhum dado válido fornecido para atualização."
LOGIN_REQUIRED_MESSAGE = "Email e senha são obrigatórios."
ID_PATTERN = re.compile(r"-?[0-9]+")
# faixa do INTEGER das tabelas
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1

# mensagens específicas por (campo, tipo de erro do pydantic)
FIELD_MESSAGES = {
    ("title", "missing"): "O título é obrigatório.",
    ("title", "string_too_short"): "O título é obrigatório.",
    ("title", "string_too_long"): "O título deve ter no máximo 100 caracteres.",
    ("content", "missing"): "O conteúdo é obrigatório.",
    ("content", "string_too_short"): "O conteúdo é obrigatório.",
    ("nome", "missing"): "O nome é obrigatório.",
    ("nome", "string_too_short"): "O nome é obrigatório.",
    ("nome", "string_too_long"): "O nome deve ter no máximo 30 caracteres.",
    ("email", "missing"): "O email é obrigatório.",
    ("email", "value_error"): "Formato de email inválido.",
    ("password", "missing"): "A senha é obrigatória.",
    ("password", "string_too_short"): "A senha deve ter pelo menos 6 caracteres.",
    ("user_type", "enum"): "Tipo de usuário inválido. Valores aceitos: PROFESSOR, ALUNO.",
}


def _generic_message(kind: str, ctx: Dict[str, Any]) -> str:
    if kind == "missing":
        return "Campo obrigatório."
    if kind == "string_too_short":
        return f"Deve ter pelo menos {ctx.get('min_length')} caractere(s)."
    if kind == "string_too_long":
        return f"Deve ter no máximo {ctx.get('max_length')} caracteres."
    if kind == "string_type":
        return "Deve ser um texto."
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return "O corpo da requisição deve ser um objeto JSON."
    if kind == "json_invalid":
        return "JSON malformado."
    return "Valor inválido."


def format_errors(errors: Iterable[Dict[str, Any]], skip: int = 0) -> List[Dict[str, str]]:
    """
    Converte os erros do pydantic em `{path, message}`.

    `skip` descarta os primeiros elementos do `loc` (ex.: "body" nos erros
    gerados pelo próprio FastAPI).
    """
    formatted = []
    for error in errors:
        loc = tuple(error.get("loc") or ())[skip:]
        path = ".".join(str(part) for part in loc)
        kind = error.get("type", "")
        ctx = error.get("ctx") or {}

        if isinstance(ctx.get("error"), Exception):
            # ValueError levantado por field_validator: a mensagem já é a nossa
            message = str(ctx["error"])
        else:
            message = FIELD_MESSAGES.get((path, kind)) or _generic_message(kind, ctx)

        formatted.append({"path": path, "message": message})
    return formatted


def _validate(schema: Type[SchemaT], payload: Any) -> SchemaT:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInput(details=format_errors(exc.errors())) from exc


def _validate_update(schema: Type[BaseModel], payload: Any) -> Dict[str, Any]:
    data = _validate(schema, payload)
    if not data.model_fields_set:
        raise InvalidInput(details=[{"path": "", "message": EMPTY_UPDATE_MESSAGE}])
    return data.model_dump(exclude_unset=True)


def validate_login(payload: Any) -> LoginIn:
    try:
        return _validate(LoginIn, payload)
    except InvalidInput as exc:
        raise BadRequest(LOGIN_REQUIRED_MESSAGE) from exc


def validate_user_create(payload: Any) -> UserCreate:
    return _validate(UserCreate, payload)


def validate_user_update(payload: Any) -> Dict[str, Any]:
    return _validate_update(UserUpdate, payload)


def validate_post_create(payload: Any) -> PostCreate:
    return _validate(PostCreate, payload)


def validate_post_update(payload: Any) -> Dict[str, Any]:
    return _validate_update(PostUpdate, payload)


def parse_id(raw: str, message: str) -> int:
    """Ids de rota são inteiros; qualquer outra coisa vira 400 antes do banco."""
    if not ID_PATTERN.fullmatch(str(raw)):
        raise BadRequest(message)
    value = int(raw)
    if not ID_MIN <= value <= ID_MAX:
        raise BadRequest(message)
    return value
