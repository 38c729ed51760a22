from pydantic import BaseModel, Field, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from app.models.user import UserType


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        # mesma normalização do EmailStr usado no cadastro; endereço inválido
        # segue cru e cai em "Credenciais inválidas."
        try:
            return validate_email(value)[1]
        except PydanticCustomError:
            return value


class LoginOut(BaseModel):
    token: str
    user_type: UserType
    id: int
    nome: str
