from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class UserType(str, Enum):
    PROFESSOR = "PROFESSOR"
    ALUNO = "ALUNO"


@dataclass(eq=False)
class User:
    nome: str
    email: str
    password_hash: str
    user_type: UserType = UserType.ALUNO
    serie: Optional[str] = None
    subject: Optional[str] = None

    # preenchidos pela camada de persistência
    id: int = field(init=False)
    created_at: datetime = field(init=False)
    updated_at: datetime = field(init=False)
