from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.exceptions.http import StorageError

logger = get_logger(__name__)

T = TypeVar("T")


def apply_dict_updates(entity: T, update_data: dict[str, Any], excluded_attrs: set[str] | None) -> T:
    """
    Dynamically applies key-value pairs from a dictionary to a type-safe ORM entity.

    Args:
        entity: The SQLAlchemy ORM object loaded into the session. Type is inferred as T.
        update_data: Dictionary of fields and values to update.
        excluded_attrs: Set of attribute names to explicitly ignore/skip updating.
    """
    excluded_attrs = excluded_attrs if excluded_attrs else set()
    for key, value in update_data.items():

        if key in excluded_attrs:
            continue

        if hasattr(entity, key):
            setattr(entity, key, value)
    return entity


@asynccontextmanager
async def transaction(session: AsyncSession, action: str) -> AsyncIterator[AsyncSession]:
    """
    Runs a write as one all-or-nothing unit: commits once on success and rolls
    back everything on any error.

    Storage failures are logged and re-raised as StorageError; domain errors
    raised inside the block propagate unchanged (after the rollback).
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Storage failure during %s", action)
        raise StorageError(f"Failed to {action}") from exc
    except Exception:
        await session.rollback()
        raise
