"""
Repository layer over SQLAlchemy.

Services and routes talk to a ``Repository`` instead of the session directly,
so the backing store can be swapped. Identifiers come from the database's
autoincrement sequence.
"""
from __future__ import annotations

from typing import Annotated, Any, Generic, Protocol, TypeVar

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.models.db import Category, Question, QuizTest

ModelT = TypeVar("ModelT")


class Repository(Protocol[ModelT]):
    """CRUD contract shared by all entity stores."""

    def get(self, entity_id: int) -> ModelT | None: ...

    def list(self, **filters: Any) -> list[ModelT]: ...

    def create(self, **values: Any) -> ModelT: ...

    def update(self, entity_id: int, **values: Any) -> ModelT | None: ...

    def delete(self, entity_id: int) -> bool: ...


class SqlRepository(Generic[ModelT]):
    """Repository backed by one mapped model class."""

    def __init__(self, db: DbSession, model: type[ModelT]):
        self.db = db
        self.model = model

    def get(self, entity_id: int) -> ModelT | None:
        return self.db.get(self.model, entity_id)

    def list(self, **filters: Any) -> list[ModelT]:
        """List rows ordered by id; filters with a None value are ignored."""
        query = select(self.model)
        for column, value in filters.items():
            if value is None:
                continue
            query = query.where(getattr(self.model, column) == value)
        query = query.order_by(self.model.id)
        return list(self.db.execute(query).scalars().all())

    def create(self, **values: Any) -> ModelT:
        entity = self.model(**values)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity_id: int, **values: Any) -> ModelT | None:
        entity = self.get(entity_id)
        if entity is None:
            return None
        for key, value in values.items():
            setattr(entity, key, value)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: int) -> bool:
        entity = self.get(entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True


def get_category_repository(
    db: Annotated[DbSession, Depends(get_db)],
) -> Repository[Category]:
    return SqlRepository(db, Category)


def get_test_repository(
    db: Annotated[DbSession, Depends(get_db)],
) -> Repository[QuizTest]:
    return SqlRepository(db, QuizTest)


def get_question_repository(
    db: Annotated[DbSession, Depends(get_db)],
) -> Repository[Question]:
    return SqlRepository(db, Question)


CategoryRepository = Annotated[Repository[Category], Depends(get_category_repository)]
TestRepository = Annotated[Repository[QuizTest], Depends(get_test_repository)]
QuestionRepository = Annotated[Repository[Question], Depends(get_question_repository)]
