# rotation_guard/models/rotation.py
"""Timestamp storage for forced password rotation
One global option row holds the activation watermark; one row per user holds
the time of the last password change.
"""
from rotation_guard.extensions import db

ACTIVATED_AT_KEY = 'force_change_activated_at'


class RotationOption(db.Model):
    """Key/value application option"""
    __tablename__ = 'rotation_options'

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.String(256), nullable=False, default='')

    def __repr__(self):
        return f'<RotationOption {self.key}={self.value}>'


class RotationRecord(db.Model):
    """Last password change of a single user, unix seconds"""
    __tablename__ = 'rotation_records'

    user_id = db.Column(db.String(64), primary_key=True)
    changed_at = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<RotationRecord user_id={self.user_id} changed_at={self.changed_at}>'
