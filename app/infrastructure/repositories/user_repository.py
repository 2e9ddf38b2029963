"""Read access to the forum user directory."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.models import UserModel


class UserRepository:
    """Provide lookups over :class:`User` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def exists(self, user_id: int) -> bool:
        return (
            self.session.query(UserModel.id).filter(UserModel.id == user_id).first()
            is not None
        )

    def list_by_usernames(self, usernames: Iterable[str]) -> Sequence[User]:
        names = list(dict.fromkeys(name for name in usernames if name))
        if not names:
            return []
        query = (
            self.session.query(UserModel)
            .filter(UserModel.username.in_(names))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            avatar=user.avatar,
            role=user.role,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            role=model.role,
            avatar=model.avatar,
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
