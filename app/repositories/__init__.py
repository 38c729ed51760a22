from app.db import tables  # noqa: F401  (mappers de User/Post)
from app.repositories.posts import PostRepository
from app.repositories.users import UserRepository

__all__ = ["PostRepository", "UserRepository"]
