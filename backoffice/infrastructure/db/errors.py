"""
Store error translation for MongoDB repositories.
"""
import functools
import logging
from typing import Callable, TypeVar

from pymongo.errors import PyMongoError

from backoffice.domain.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

ReturnType = TypeVar("ReturnType")


def translate_store_errors(func: Callable[..., ReturnType]) -> Callable[..., ReturnType]:
    """Re-raise driver errors as StoreUnavailable. No retries here."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> ReturnType:
        try:
            return func(*args, **kwargs)
        except PyMongoError as e:
            logger.error("Document store call %s failed: %s", func.__qualname__, e)
            raise StoreUnavailable("Document store is unavailable") from e

    return wrapper
