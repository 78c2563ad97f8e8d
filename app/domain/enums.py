import enum


class SecurityEventEnum(str, enum.Enum):
    """Session binding security event types."""

    SESSION_BOUND = "SESSION_BOUND"
    SESSION_BIND_FAILED = "SESSION_BIND_FAILED"
    SESSION_VERIFIED = "SESSION_VERIFIED"
    SESSION_UNBOUND = "SESSION_UNBOUND"
    SESSION_HIJACKED = "SESSION_HIJACKED"
    STORE_LOOKUP_FAILED = "STORE_LOOKUP_FAILED"
    FINGERPRINT_MISSING = "FINGERPRINT_MISSING"
