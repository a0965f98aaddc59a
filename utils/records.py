"""
Owner-scoped lookups for the records domain.
Every students/courses/enrollments/marks query goes through these so the
owner filter is never forgotten.
"""
from sqlalchemy import select

from models import db
from utils.errors import Forbidden, NotFound


def owned_select(model, owner_id):
    return select(model).where(model.owner_id == owner_id)


def list_owned(model, owner_id, order_by=None):
    stmt = owned_select(model, owner_id).order_by(order_by if order_by is not None else model.id)
    return db.session.execute(stmt).scalars().all()


def get_owned(model, obj_id, owner_id, label=None):
    """Row by id; NotFound if missing, Forbidden if it belongs to someone else."""
    label = label or model.__name__
    obj = db.session.get(model, obj_id)
    if obj is None:
        raise NotFound(f"{label} not found")
    if obj.owner_id != owner_id:
        raise Forbidden(f"{label} does not belong to you")
    return obj


def find_owned(model, obj_id, owner_id):
    """Row by id within the owner's scope, or None."""
    if obj_id is None:
        return None
    return db.session.execute(
        owned_select(model, owner_id).where(model.id == obj_id)
    ).scalar_one_or_none()
