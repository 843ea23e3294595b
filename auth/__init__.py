from .service import (
    verify_token,
    create_access_token,
    verify_password,
    get_password_hash,
    require_admin,
    ADMIN_ROLES,
)
from .router import router

__all__ = [
    'router', 'verify_token', 'create_access_token', 'verify_password',
    'get_password_hash', 'require_admin', 'ADMIN_ROLES',
]
