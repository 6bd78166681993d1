'''
Helpers shared by the services for talking to the database.
'''
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from ..common.exceptions import StoreFailureError

@contextmanager
def store_guard(operation: str, logger: logging.Logger) -> Iterator[None]:
    """
    Wraps every database error raised inside the block into a
    StoreFailureError, logging the original with its traceback.
    Domain errors raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            f"Store failure during {operation}: {e}",
            exc_info=True,
            extra={"operation": operation}
        )
        raise StoreFailureError(operation) from e
