# rotation_guard/extensions.py
"""Flask extensions initialization"""
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

from rotation_guard.guard import RotationGuard

db = SQLAlchemy()
csrf = CSRFProtect()
guard = RotationGuard()
