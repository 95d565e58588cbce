# rotation_guard/utils/__init__.py
"""Utility functions and decorators"""
from .security import hash_password, verify_password
from .decorators import login_required, capability_required

__all__ = ['hash_password', 'verify_password', 'login_required', 'capability_required']
