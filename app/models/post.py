from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.models.user import User


@dataclass(eq=False)
class Post:
    title: str
    content: str
    created_by_id: int
    edited_by_id: Optional[int] = None

    id: int = field(init=False)
    created_at: datetime = field(init=False)
    edited_at: Optional[datetime] = field(init=False)

    # relacionamentos (carregados pelo mapper)
    created_by: Optional[User] = field(init=False, repr=False)
    edited_by: Optional[User] = field(init=False, repr=False)
