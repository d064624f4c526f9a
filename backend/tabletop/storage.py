"""Flat key-value persistence.

Every game keeps its whole state as one JSON string under a fixed key.
Reads never fail: a missing or unreadable value yields ``None`` (or the
caller's default) and the problem is logged. Writes roll back and log on
failure and report success as a bool.
"""

import json
from typing import Any, Iterable, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from tabletop import db
from tabletop.models import StoredValue


def get_item(key: str) -> Optional[str]:
    try:
        row = db.session.get(StoredValue, key)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[storage-read] key={key} failed: {exc}")
        return None
    return row.value if row else None


def set_item(key: str, value: str) -> bool:
    try:
        row = db.session.get(StoredValue, key)
        if row is None:
            row = StoredValue(key=key, value=value)
        else:
            row.value = value
        db.session.add(row)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[storage-write] key={key} failed: {exc}")
        return False
    return True


def remove_item(key: str) -> bool:
    return multi_remove([key])


def multi_remove(keys: Iterable[str]) -> bool:
    keys = list(keys)
    if not keys:
        return True
    try:
        StoredValue.query.filter(StoredValue.key.in_(keys)).delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[storage-remove] keys={keys} failed: {exc}")
        return False
    current_app.logger.info(f"[storage-remove] keys={keys}")
    return True


def load_json(key: str, default: Any = None) -> Any:
    """Return the decoded value under ``key``, or ``default`` if absent or corrupt."""
    raw = get_item(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError as exc:
        current_app.logger.error(f"[storage-read] key={key} holds invalid JSON: {exc}")
        return default


def save_json(key: str, data: Any) -> bool:
    return set_item(key, json.dumps(data))
