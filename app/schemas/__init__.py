from app.schemas.auth import LoginIn, LoginOut
from app.schemas.post import PostCreate, PostMessageOut, PostOut, PostUpdate
from app.schemas.user import AuthorOut, UserCreate, UserMessageOut, UserOut, UserUpdate

__all__ = [
    "AuthorOut",
    "LoginIn",
    "LoginOut",
    "PostCreate",
    "PostMessageOut",
    "PostOut",
    "PostUpdate",
    "UserCreate",
    "UserMessageOut",
    "UserOut",
    "UserUpdate",
]
