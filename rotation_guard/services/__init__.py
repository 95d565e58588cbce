# rotation_guard/services/__init__.py
"""Policy engine: password strength, rotation clock, request gate, reactivation"""
from .password_policy import PasswordPolicy, ViolationKind, evaluate_password
from .rotation_clock import RotationClock, RotationStatus
from .timestamp_store import TimestampStore, MemoryTimestampStore, SqlTimestampStore
from .force_change_gate import ForceChangeGate, RequestContext, RequestKind, Route, Redirect
from .reactivation import ReactivationAction, ReactivationResult

__all__ = [
    'PasswordPolicy', 'ViolationKind', 'evaluate_password',
    'RotationClock', 'RotationStatus',
    'TimestampStore', 'MemoryTimestampStore', 'SqlTimestampStore',
    'ForceChangeGate', 'RequestContext', 'RequestKind', 'Route', 'Redirect',
    'ReactivationAction', 'ReactivationResult',
]
