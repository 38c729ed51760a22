from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: Optional[str] = None

    # usados quando DATABASE_URL não é informado
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "blog_educacional"

    JWT_SECRET: str = "segredo-super-secreto"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_SECONDS: int = 60 * 60 * 24

    BCRYPT_ROUNDS: int = 10

    ENVIRONMENT: str = "development"  # development, production, test
    APP_PORT: int = Field(default=3000, validation_alias=AliasChoices("APP_PORT", "PORT"))
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: Optional[bool] = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def sql_echo(self) -> bool:
        if self.SQL_ECHO is None:
            return self.is_development
        return self.SQL_ECHO


settings = Settings()
