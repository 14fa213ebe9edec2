"""Field-by-field merge of partial update requests."""

from typing import Any, Dict

from pydantic import BaseModel


def apply_updates(target: Any, update: BaseModel, field_map: Dict[str, str] = None) -> list:
    """Copy every provided, non-null field of ``update`` onto ``target``.

    Fields left out of the request, or sent as null, keep the stored value
    (``new if new is not None else old``). ``field_map`` renames request
    fields to model attributes. Returns the names of the attributes changed.
    """
    field_map = field_map or {}
    changed = []
    for field, value in update.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        attr = field_map.get(field, field)
        if getattr(target, attr) != value:
            setattr(target, attr, value)
            changed.append(attr)
    return changed
