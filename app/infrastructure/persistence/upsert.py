"""Insert-if-absent primitive keyed by a unique constraint.

Emits INSERT ... ON CONFLICT (<key columns>) DO NOTHING, then reads the row
back by its key. An existing row is never modified, which gives seed data
create-if-missing semantics that are atomic per row at the database level.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def insert_if_absent(
    session: AsyncSession,
    model: type[ModelType],
    key: Mapping[str, Any],
    values: Mapping[str, Any] | None = None,
) -> tuple[ModelType, bool]:
    """Insert a row unless one already exists for key; return (row, created).

    Args:
        session: Session the statement runs in (caller owns the transaction).
        model: Mapped class; key columns must form a unique constraint on it.
        key: Unique-key columns and their values (e.g. {"name": "admin"}).
        values: Remaining column values, used only when the row is created.

    Returns:
        The persisted row (new or pre-existing) and whether this call created it.

    Raises:
        ValueError: If the session's dialect has no ON CONFLICT support here.
    """
    dialect_name = session.get_bind().dialect.name
    dialect_insert = _DIALECT_INSERTS.get(dialect_name)
    if dialect_insert is None:
        raise ValueError(f"insert_if_absent does not support dialect {dialect_name!r}")

    row = {**(values or {}), **key}
    stmt = (
        dialect_insert(model.__table__)
        .values(**row)
        .on_conflict_do_nothing(index_elements=list(key))
    )
    result = await session.execute(stmt)
    created = result.rowcount == 1

    existing = await session.execute(select(model).filter_by(**key))
    return existing.scalar_one(), created
