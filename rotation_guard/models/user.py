"""User model for the host credential store"""
from datetime import datetime

from rotation_guard.extensions import db


class User(db.Model):
    """User with bcrypt credentials and a coarse capability set"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)

    ADMIN_CAPABILITIES = frozenset({'manage_options', 'manage_users'})

    def __repr__(self):
        return f'<User {self.username}>'

    def can(self, capability):
        """Check whether the user holds a named capability"""
        return bool(self.is_active and self.is_admin and capability in self.ADMIN_CAPABILITIES)
