"""Column copying between ORM models and domain dataclasses."""

from dataclasses import fields
from typing import Any, Dict, Iterable, Type, TypeVar

T = TypeVar("T")

_SKIP = ("id", "created_at", "subscribed_at")


def columns_of(entity_cls: Type[Any], model: Any) -> Dict[str, Any]:
    """Values of every model column that has a same-named dataclass field."""
    column_names = set(model.__table__.columns.keys())
    return {
        f.name: getattr(model, f.name)
        for f in fields(entity_cls)
        if f.name in column_names
    }


def to_entity(entity_cls: Type[T], model: Any, **overrides: Any) -> T:
    values = columns_of(entity_cls, model)
    values.update(overrides)
    return entity_cls(**values)


def copy_onto(model: Any, entity: Any, exclude: Iterable[str] = _SKIP) -> None:
    """Write an entity's field values onto its model, skipping identity columns."""
    column_names = set(model.__table__.columns.keys())
    skipped = set(exclude)
    for f in fields(entity):
        if f.name in column_names and f.name not in skipped:
            setattr(model, f.name, getattr(entity, f.name))
