"""
DevConnector Backend — Repository Helpers
===========================================

What:  Shared plumbing for the repository classes.
How:   `translate_errors` turns any SQLAlchemyError raised inside its block into
       a DatabaseError (generic 500, details logged); `coerce_uuid` maps
       malformed ids to None so lookups report "not found" instead of failing.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.exceptions import DatabaseError

logger = logging.getLogger(__name__)

IdLike = Union[str, uuid.UUID]


def coerce_uuid(value: IdLike) -> Optional[uuid.UUID]:
    """Parse `value` as a UUID; None if it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__},
        ) from e


class Repository:
    """Holds the request's session; subclasses add entity-specific queries."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self) -> None:
        """
        Flush pending changes so generated ids and defaults are populated.

        The transaction itself is committed by `get_db_session` once the
        request handler returns.
        """
        with translate_errors("save"):
            await self.session.flush()
