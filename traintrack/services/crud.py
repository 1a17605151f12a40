"""Typed data-access helpers shared by the resource routers."""

import logging
import math
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from traintrack.core.errors import BadRequestError, NotFoundError
from traintrack.models import Base
from traintrack.schemas.common import Pagination

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def get_or_404(db: Session, model: type[ModelT], entity_id: int, label: str) -> ModelT:
    """Load a row by primary key or raise NotFoundError('<label> not found')."""
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFoundError(f"{label} not found")
    return entity


def apply_changes(entity: ModelT, changes: BaseModel | dict[str, Any]) -> ModelT:
    """
    Copy the fields the client actually sent onto the entity.

    Pydantic models are dumped with exclude_unset so omitted fields keep
    their stored value.
    """
    if isinstance(changes, BaseModel):
        changes = changes.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if not hasattr(entity, field):
            raise BadRequestError(f"Unknown field {field}")
        setattr(entity, field, value)
    return entity


def save(db: Session, entity: ModelT) -> ModelT:
    """Add, commit and refresh; constraint violations become 400 after rollback."""
    db.add(entity)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Save of %s rejected: %s", type(entity).__name__, e.orig)
        raise BadRequestError("Referenced entity does not exist or constraint violated") from e
    db.refresh(entity)
    return entity


def delete(db: Session, entity: Base) -> None:
    db.delete(entity)
    db.commit()


def paginate(query: Query, page: int, limit: int) -> tuple[list[Any], Pagination]:
    """Return one page of rows ordered by the query and its pagination block."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    total_pages = math.ceil(total / limit) if total else 0
    return rows, Pagination(current_page=page, total_pages=total_pages, total_number=total)
