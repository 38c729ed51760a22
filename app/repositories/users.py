from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.models.user import User, UserType

# únicos campos que um update pode tocar
USER_PATCH_FIELDS = ("nome", "email", "password_hash", "user_type", "serie", "subject")


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: Dict[str, Any]) -> User:
        """Cria o usuário guardando só o hash da senha (a senha em texto é descartada)."""
        values = dict(data)
        password = values.pop("password")

        user = User(
            nome=values["nome"],
            email=values["email"],
            password_hash=hash_password(password),
            user_type=values.get("user_type") or UserType.ALUNO,
            serie=values.get("serie"),
            subject=values.get("subject"),
        )
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def find_all(self) -> List[User]:
        return list(self.db.execute(select(User).order_by(User.id)).scalars().all())

    def update(self, user_id: int, data: Dict[str, Any]) -> Optional[User]:
        values = dict(data)
        if values.get("password"):
            values["password_hash"] = hash_password(values["password"])
        values.pop("password", None)

        user = self.db.get(User, user_id)
        if not user:
            return None

        for field in USER_PATCH_FIELDS:
            if field in values:
                setattr(user, field, values[field])

        self._commit()
        self.db.refresh(user)
        return user

    def remove(self, user_id: int) -> bool:
        result = self.db.execute(delete(User).where(User.id == user_id))
        self._commit()
        return result.rowcount > 0

    @staticmethod
    def compare_password(password: str, password_hash: Optional[str]) -> bool:
        return verify_password(password, password_hash)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
