# rotation_guard/models/__init__.py
"""Database models for Rotation Guard"""
from .user import User
from .rotation import RotationOption, RotationRecord

__all__ = ['User', 'RotationOption', 'RotationRecord']
