from app.models.post import Post
from app.models.user import User, UserType

__all__ = ["Post", "User", "UserType"]
