from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.user import AuthorOut


class PostCreate(BaseModel):
    # created_by_id vem do usuário autenticado, nunca do corpo
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)


class PostUpdate(BaseModel):
    title: str = Field(default=None, min_length=1, max_length=100)
    content: str = Field(default=None, min_length=1)


class PostOut(BaseModel):
    id: int
    title: str
    content: str
    created_by_id: int
    edited_by_id: Optional[int] = None
    created_at: Optional[datetime] = None
    edited_at: Optional[datetime] = None
    created_by: Optional[AuthorOut] = None

    class Config:
        from_attributes = True


class PostMessageOut(BaseModel):
    message: str
    post: PostOut
