from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.models.post import Post

# únicos campos que um update pode tocar
POST_PATCH_FIELDS = ("title", "content", "edited_by_id")

LIKE_ESCAPE = "\\"


def _escape_like(term: str) -> str:
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class PostRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_author(self):
        return select(Post).options(joinedload(Post.created_by))

    def _newest_first(self, q):
        return q.order_by(Post.created_at.desc(), Post.id.desc())

    def create(self, data: Dict[str, Any]) -> Post:
        post = Post(
            title=data["title"],
            content=data["content"],
            created_by_id=data["created_by_id"],
        )
        self.db.add(post)
        self._commit()
        self.db.refresh(post)
        return post

    def find_all(self) -> List[Post]:
        q = self._newest_first(self._with_author())
        return list(self.db.execute(q).scalars().all())

    def find_by_id(self, post_id: int) -> Optional[Post]:
        q = self._with_author().where(Post.id == post_id)
        return self.db.execute(q).scalar_one_or_none()

    def update(self, post_id: int, data: Dict[str, Any]) -> Optional[Post]:
        post = self.find_by_id(post_id)
        if not post:
            return None

        for field in POST_PATCH_FIELDS:
            if field in data:
                setattr(post, field, data[field])
        post.edited_at = datetime.now(timezone.utc)

        self._commit()
        self.db.refresh(post)
        return post

    def remove(self, post_id: int) -> bool:
        result = self.db.execute(delete(Post).where(Post.id == post_id))
        self._commit()
        return result.rowcount > 0

    def search(self, term: str) -> List[Post]:
        """Busca (sem diferenciar maiúsculas) no título OU no conteúdo."""
        pattern = f"%{_escape_like(term)}%"
        q = self._with_author().where(
            or_(
                Post.title.ilike(pattern, escape=LIKE_ESCAPE),
                Post.content.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        return list(self.db.execute(self._newest_first(q)).scalars().all())

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
