"""Generic Async Repository Pattern for DDD.

This module provides a generic repository base class that handles
common CRUD operations with full async support using SQLAlchemy 2.0.
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.infra.database import Base

# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class GenericRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Generic async repository providing standard CRUD operations.

    Repositories never commit; the calling service owns the transaction.

    Type Parameters:
        ModelType: The SQLAlchemy model class
        CreateSchemaType: Pydantic schema for creation
        UpdateSchemaType: Pydantic schema for updates

    Example:
        class UserProfileRepository(
            GenericRepository[UserProfile, ProfileCreate, ProfileUpdate]
        ):
            def __init__(self, session: AsyncSession):
                super().__init__(UserProfile, session)
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self._model = model
        self._session = session

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    @property
    def model(self) -> type[ModelType]:
        """Get the model class."""
        return self._model

    # ==================== CREATE Operations ====================

    async def create(self, data: CreateSchemaType | dict[str, Any]) -> ModelType:
        """Create a new record.

        Args:
            data: Pydantic schema or dict with creation data

        Returns:
            The created model instance
        """
        if isinstance(data, BaseModel):
            obj_data = data.model_dump(exclude_unset=True)
        else:
            obj_data = data

        db_obj = self._model(**obj_data)
        return await self.add(db_obj)

    async def add(self, db_obj: ModelType) -> ModelType:
        """Add an already-built instance (with any attached children).

        Args:
            db_obj: Model instance, possibly carrying a related object graph

        Returns:
            The same instance, flushed so its defaults are populated
        """
        self._session.add(db_obj)
        await self._session.flush()
        return db_obj

    # ==================== READ Operations ====================

    async def get_by_id(
        self,
        id: UUID,
        *,
        load_relations: list[str] | None = None,
    ) -> ModelType | None:
        """Get a record by its ID.

        Args:
            id: The UUID of the record
            load_relations: Optional relationship paths to eager load,
                dotted for nested paths ("days.activities")

        Returns:
            The model instance or None if not found
        """
        stmt = select(self._model).where(self._model.id == id)
        stmt = self._apply_eager_loading(stmt, load_relations)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_one(
        self,
        *conditions: Any,
        load_relations: list[str] | None = None,
    ) -> ModelType | None:
        """Find a single record matching the conditions.

        Args:
            *conditions: SQLAlchemy filter conditions
            load_relations: Optional relationship paths to eager load

        Returns:
            The model instance or None
        """
        stmt = select(self._model).where(*conditions)
        stmt = self._apply_eager_loading(stmt, load_relations)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_many(
        self,
        *conditions: Any,
        skip: int = 0,
        limit: int | None = 100,
        order_by: Any | None = None,
        load_relations: list[str] | None = None,
    ) -> Sequence[ModelType]:
        """Find multiple records matching the conditions.

        Args:
            *conditions: SQLAlchemy filter conditions
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return, None for all
            order_by: Column or list of columns for ordering
            load_relations: Optional relationship paths to eager load

        Returns:
            Sequence of model instances
        """
        stmt = select(self._model)
        if conditions:
            stmt = stmt.where(*conditions)
        stmt = self._apply_ordering(stmt, order_by)
        stmt = self._apply_eager_loading(stmt, load_relations)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def count(self, *conditions: Any) -> int:
        """Count records matching the conditions.

        Args:
            *conditions: SQLAlchemy filter conditions

        Returns:
            Number of matching records
        """
        stmt = select(func.count()).select_from(self._model)
        if conditions:
            stmt = stmt.where(*conditions)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def exists(self, *conditions: Any) -> bool:
        """Check if any record exists matching the conditions."""
        stmt = select(select(self._model.id).where(*conditions).exists())
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    # ==================== UPDATE Operations ====================

    async def update(
        self,
        db_obj: ModelType,
        data: UpdateSchemaType | dict[str, Any],
    ) -> ModelType:
        """Apply field updates to a loaded record.

        Args:
            db_obj: The instance to update
            data: Pydantic schema or dict with update data

        Returns:
            The updated model instance
        """
        if isinstance(data, BaseModel):
            update_data = data.model_dump(exclude_unset=True)
        else:
            update_data = data

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await self._session.flush()
        return db_obj

    # ==================== DELETE Operations ====================

    async def delete(self, db_obj: ModelType) -> None:
        """Delete a loaded record, cascading to its owned children."""
        await self._session.delete(db_obj)
        await self._session.flush()

    async def delete_many(self, *conditions: Any) -> int:
        """Delete multiple records matching the conditions.

        Args:
            *conditions: SQLAlchemy filter conditions

        Returns:
            Number of deleted records
        """
        stmt = delete(self._model).where(*conditions)
        result = await self._session.execute(stmt)
        return result.rowcount

    # ==================== Helper Methods ====================

    def _apply_eager_loading(
        self,
        stmt: Select[tuple[ModelType]],
        load_relations: list[str] | None,
    ) -> Select[tuple[ModelType]]:
        """Apply selectin loading for (possibly nested) relationships."""
        for relation in load_relations or ():
            owner: Any = self._model
            loader = None
            for name in relation.split("."):
                attr = getattr(owner, name)
                loader = selectinload(attr) if loader is None else loader.selectinload(attr)
                owner = attr.property.mapper.class_
            stmt = stmt.options(loader)
        return stmt

    def _apply_ordering(
        self,
        stmt: Select[tuple[ModelType]],
        order_by: Any | None,
    ) -> Select[tuple[ModelType]]:
        """Apply ordering to the query."""
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                stmt = stmt.order_by(*order_by)
            else:
                stmt = stmt.order_by(order_by)
        else:
            # Default ordering: newest first, id breaks ties
            stmt = stmt.order_by(self._model.created_at.desc(), self._model.id)
        return stmt
