"""
Утилиты
"""
from achievements_service.utils.auth import create_access_token, verify_token
from achievements_service.utils.permissions import get_current_user

__all__ = [
    "create_access_token",
    "verify_token",
    "get_current_user",
]
