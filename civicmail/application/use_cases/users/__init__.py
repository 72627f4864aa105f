"""Use cases for managing user accounts."""

from .confirm_user import confirm_user
from .register_user import register_user
from .reset_password import request_password_reset

__all__ = ["confirm_user", "register_user", "request_password_reset"]
