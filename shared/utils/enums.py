from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UPSTREAM_FAILURE = "upstream_failure"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class UserRole(str, Enum):
    DRIVER = "driver"
    HOST = "host"
    ADMIN = "admin"


class BookingStatus(str, Enum):
    RESERVED = "reserved"
    RELEASED = "released"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
