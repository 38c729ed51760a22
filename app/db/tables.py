"""
Tabelas (nome de coluna, tipo, constraints) e o mapeamento das dataclasses
de `app.models` sobre elas.

Importar este módulo é o que registra os mappers; qualquer código que faça
queries com User/Post passa por aqui (session/repositories importam).
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from app.db.base import mapper_registry, metadata
from app.models.post import Post
from app.models.user import User, UserType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("nome", String(30), nullable=False),
    Column("email", String(100), nullable=False, unique=True, index=True),
    Column("password_hash", String(100), nullable=False),
    Column(
        "user_type",
        Enum(UserType, name="user_type"),
        nullable=False,
        default=UserType.ALUNO,
    ),
    Column("serie", String(30), nullable=True),
    Column("subject", String(30), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
)

posts_table = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(100), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "created_by_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "edited_by_id",
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow, index=True),
    Column("edited_at", DateTime(timezone=True), nullable=True),
)


mapper_registry.map_imperatively(User, users_table)
mapper_registry.map_imperatively(
    Post,
    posts_table,
    properties={
        "created_by": relationship(
            User,
            foreign_keys=[posts_table.c.created_by_id],
        ),
        "edited_by": relationship(
            User,
            foreign_keys=[posts_table.c.edited_by_id],
        ),
    },
)
