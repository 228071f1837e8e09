from .backend import InMemoryStore, SessionStore
from .config import Settings
from .cookie import decode_cookie, encode_cookie
from .dynamodb import DynamoDBSessionStore
from .errors import (
    InvalidOperationError,
    SessionError,
    SessionStoreError,
    StaleHandleError,
    UnsupportedValueError,
)
from .identifiers import derive_key, generate_token
from .manager import Session, SessionState
from .values import ValueType

__all__ = [
    "Session",
    "SessionState",
    "SessionStore",
    "InMemoryStore",
    "DynamoDBSessionStore",
    "Settings",
    "decode_cookie",
    "encode_cookie",
    "derive_key",
    "generate_token",
    "ValueType",
    "SessionError",
    "InvalidOperationError",
    "StaleHandleError",
    "SessionStoreError",
    "UnsupportedValueError",
]
