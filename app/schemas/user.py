from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.user import UserType

EMAIL_MAX_LENGTH = 100


def _check_email_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"O email deve ter no máximo {EMAIL_MAX_LENGTH} caracteres.")
    return value


class UserCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)
    user_type: UserType = UserType.ALUNO
    serie: Optional[str] = Field(default=None, max_length=30)
    subject: Optional[str] = Field(default=None, max_length=30)

    @field_validator("email")
    @classmethod
    def check_email_length(cls, value):
        return _check_email_length(value)


class UserUpdate(BaseModel):
    # sem None explícito nos campos obrigatórios do usuário
    nome: str = Field(default=None, min_length=1, max_length=30)
    email: EmailStr = Field(default=None)
    password: str = Field(default=None, min_length=6)
    user_type: UserType = Field(default=None)
    serie: Optional[str] = Field(default=None, max_length=30)
    subject: Optional[str] = Field(default=None, max_length=30)

    @field_validator("email")
    @classmethod
    def check_email_length(cls, value):
        return _check_email_length(value)


class UserOut(BaseModel):
    id: int
    nome: str
    email: str
    user_type: UserType
    serie: Optional[str] = None
    subject: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthorOut(BaseModel):
    id: int
    nome: str
    email: str
    user_type: UserType

    class Config:
        from_attributes = True


class UserMessageOut(BaseModel):
    message: str
    user: UserOut
