"""
Shared plumbing: the ServiceResult/ErrorKind failure taxonomy, the
application exceptions, the timestamped BaseModel and the health check.

Models are not re-exported here; import them from core.models once apps
are loaded.
"""

from .services import BaseService, ErrorKind, ServiceResult

from .exceptions import AuthenticationError, BaseApplicationError, TransientError

__all__ = [
    "AuthenticationError",
    "BaseApplicationError",
    "BaseService",
    "ErrorKind",
    "ServiceResult",
    "TransientError",
]
