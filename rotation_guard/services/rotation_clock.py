# rotation_guard/services/rotation_clock.py
"""Rotation clock
Decides whether a user must rotate their password by comparing the user's
last change against the global activation watermark. Nothing is cached: each
decision reads both timestamps again, so re-arming takes effect immediately.
"""
import logging
import time
from collections import namedtuple

logger = logging.getLogger(__name__)

RotationStatus = namedtuple('RotationStatus', ['activated_at', 'changed_at', 'required'])


def _system_time():
    return int(time.time())


class RotationClock:
    """
    Global watermark plus per-user change timestamps

    Args:
        store: TimestampStore providing persistence
        time_source: Callable returning the current unix time in seconds
    """

    def __init__(self, store, time_source=None):
        self.store = store
        self.time_source = time_source or _system_time

    def now(self) -> int:
        return int(self.time_source())

    def is_rotation_required(self, user_id) -> bool:
        """True when the watermark is set and the user changed before it (or never)"""
        return self.status(user_id).required

    def status(self, user_id) -> RotationStatus:
        activated_at = self.store.read_activation()
        changed_at = self.store.read_changed(user_id)
        if activated_at <= 0:
            required = False
        elif changed_at <= 0:
            required = True
        else:
            required = changed_at < activated_at
        return RotationStatus(activated_at, changed_at, required)

    def record_password_changed(self, user_id) -> int:
        """Stamp the user's last change with the current time"""
        stamp = self.now()
        self.store.write_changed(user_id, stamp)
        logger.info('Password change recorded for user %s at %d', user_id, stamp)
        return stamp

    def arm_rotation_requirement(self) -> int:
        """Move the watermark to now; everyone who changed earlier must rotate"""
        stamp = self.now()
        self.store.write_activation(stamp)
        logger.warning('Forced password rotation armed at %d', stamp)
        return stamp

    def is_armed(self) -> bool:
        return self.store.read_activation() > 0
