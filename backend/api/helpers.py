"""Shared API helpers for route handlers."""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from services.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


@contextmanager
def translate_service_errors() -> Iterator[None]:
    """Map service exceptions raised inside the block onto HTTP errors.

    Raises:
        HTTPException:
            - 404 Not Found: unknown portfolio or investment id; detail names
              the entity and id
            - 400 Bad Request: validation failed; detail is
              ``{"field": ..., "message": ...}``
    """
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidInputError as e:
        logger.info("Rejected request: %s", e)
        raise HTTPException(
            status_code=400,
            detail={"field": e.field, "message": e.message},
        ) from e
