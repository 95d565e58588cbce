# rotation_guard/services/timestamp_store.py
"""Timestamp persistence for the rotation clock
Two integers matter: the global activation watermark and, per user, the time
of the last password change. Anything missing or unreadable reads as 0.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict

logger = logging.getLogger(__name__)


def _as_timestamp(value) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


class TimestampStore(ABC):
    """Read/write access to the two rotation timestamps"""

    @abstractmethod
    def read_activation(self) -> int:
        """Global activation watermark, 0 when unset"""

    @abstractmethod
    def write_activation(self, timestamp: int) -> None:
        """Replace the global activation watermark"""

    @abstractmethod
    def read_changed(self, user_id) -> int:
        """Last password change of a user, 0 when never recorded"""

    @abstractmethod
    def write_changed(self, user_id, timestamp: int) -> None:
        """Replace the last password change of a user"""


class MemoryTimestampStore(TimestampStore):
    """Dictionary-backed store for tests and embedding"""

    def __init__(self, activated_at: int = 0, changed: Dict = None):
        self.activated_at = activated_at
        self.changed = dict(changed or {})

    def read_activation(self) -> int:
        return _as_timestamp(self.activated_at)

    def write_activation(self, timestamp: int) -> None:
        self.activated_at = timestamp

    def read_changed(self, user_id) -> int:
        return _as_timestamp(self.changed.get(str(user_id)))

    def write_changed(self, user_id, timestamp: int) -> None:
        self.changed[str(user_id)] = timestamp


class SqlTimestampStore(TimestampStore):
    """
    Store backed by the rotation_options and rotation_records tables

    Every write commits immediately so a later read in any process sees it.

    Args:
        db: Flask-SQLAlchemy instance bound to the application
    """

    def __init__(self, db):
        from rotation_guard.models.rotation import ACTIVATED_AT_KEY, RotationOption, RotationRecord

        self.db = db
        self.activated_at_key = ACTIVATED_AT_KEY
        self.option_model = RotationOption
        self.record_model = RotationRecord

    def read_activation(self) -> int:
        option = self.db.session.get(self.option_model, self.activated_at_key)
        return _as_timestamp(option.value) if option else 0

    def write_activation(self, timestamp: int) -> None:
        option = self.db.session.get(self.option_model, self.activated_at_key)
        if option is None:
            option = self.option_model(key=self.activated_at_key)
            self.db.session.add(option)
        option.value = str(int(timestamp))
        self._commit()

    def read_changed(self, user_id) -> int:
        record = self.db.session.get(self.record_model, str(user_id))
        return _as_timestamp(record.changed_at) if record else 0

    def write_changed(self, user_id, timestamp: int) -> None:
        record = self.db.session.get(self.record_model, str(user_id))
        if record is None:
            record = self.record_model(user_id=str(user_id))
            self.db.session.add(record)
        record.changed_at = int(timestamp)
        self._commit()

    def _commit(self):
        try:
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            logger.exception('Failed to persist rotation timestamp')
            raise
