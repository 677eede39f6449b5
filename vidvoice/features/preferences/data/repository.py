import copy
from typing import Any, Dict
from vidvoice.core.database.connection import SessionLocal
from .sql_models import PreferenceModel
from ..domain.interfaces import IPreferenceStore

class SqlPreferenceStore(IPreferenceStore):
    def get(self, key: str, default: Any = None) -> Any:
        with SessionLocal() as db:
            row = db.query(PreferenceModel).filter(PreferenceModel.key == key).first()
            if row is None or row.value is None:
                return default
            return row.value

    def set(self, key: str, value: Any) -> None:
        with SessionLocal() as db:
            try:
                row = db.query(PreferenceModel).filter(PreferenceModel.key == key).first()
                if row is None:
                    db.add(PreferenceModel(key=key, value=value))
                else:
                    # Reassign so the JSON column is flagged dirty
                    row.value = copy.deepcopy(value)
                db.commit()
            except Exception:
                db.rollback()
                raise

    def delete(self, key: str) -> None:
        with SessionLocal() as db:
            db.query(PreferenceModel).filter(PreferenceModel.key == key).delete()
            db.commit()


class InMemoryPreferenceStore(IPreferenceStore):
    """Process-local store for tests and headless demos."""

    def __init__(self, initial: Dict[str, Any] = None):
        self._data = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
