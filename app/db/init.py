import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url

from app.core.config import settings
from app.db.tables import metadata

logger = logging.getLogger(__name__)


def ensure_database_exists(url: str) -> None:
    """Cria o banco PostgreSQL se ainda não existir (outros dialetos: nada a fazer)."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "postgresql":
        return

    db_name = parsed.database
    if not db_name:
        raise RuntimeError("Nome do banco não configurado. Verifique POSTGRES_DB / DATABASE_URL.")

    admin_engine = create_engine(
        parsed.set(database="postgres"),
        isolation_level="AUTOCOMMIT",
    )
    try:
        with admin_engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"),
                {"name": db_name},
            ).scalar()

            if exists:
                logger.info('[DB INIT] Banco de dados "%s" já existe. Conectando...', db_name)
                return

            logger.info('[DB INIT] Banco de dados "%s" não encontrado. Criando...', db_name)
            quoted = conn.dialect.identifier_preparer.quote(db_name)
            conn.execute(text(f"CREATE DATABASE {quoted}"))
            logger.info('[DB INIT] Banco de dados "%s" criado com sucesso.', db_name)
    finally:
        admin_engine.dispose()


def create_tables(engine: Engine) -> None:
    metadata.create_all(engine)
    logger.info("[DB INIT] Criação de tabelas concluída.")


def bootstrap_database(engine: Engine) -> None:
    """Verifica/cria o banco, testa a conexão e sincroniza o schema."""
    if settings.ENVIRONMENT != "production":
        ensure_database_exists(engine.url.render_as_string(hide_password=False))

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    create_tables(engine)
