"""
Mapping of engine errors to HTTP responses.

- InvalidInputError -> 422
- RecordStoreError  -> 503
"""
from contextlib import contextmanager
import logging

from fastapi import HTTPException

from application.exceptions import InvalidInputError, RecordStoreError

logger = logging.getLogger(__name__)


@contextmanager
def engine_errors():
    """Translate engine exceptions raised inside the block into HTTPException."""
    try:
        yield
    except InvalidInputError as e:
        logger.info(f"Rejected invalid input: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e
    except RecordStoreError as e:
        logger.error(f"Record store unavailable: {e}")
        raise HTTPException(
            status_code=503,
            detail="Personal record store unavailable. Try again later.",
        ) from e
