"""
Audit Logging Service
Logs session binding security events with a risk score.
"""
import logging
from typing import Optional

from app.domain.enums import SecurityEventEnum
from app.domain.schemas.session import AuditEvent

logger = logging.getLogger(__name__)


class AuditService:
    """Service for audit logging with risk score calculation."""

    # Risk scores by event type
    RISK_SCORES = {
        SecurityEventEnum.SESSION_BOUND: 5,
        SecurityEventEnum.SESSION_VERIFIED: 0,
        SecurityEventEnum.SESSION_UNBOUND: 30,
        SecurityEventEnum.SESSION_BIND_FAILED: 40,
        SecurityEventEnum.STORE_LOOKUP_FAILED: 40,
        SecurityEventEnum.FINGERPRINT_MISSING: 50,
        SecurityEventEnum.SESSION_HIJACKED: 100,
    }

    @staticmethod
    def calculate_risk_score(event_type: SecurityEventEnum) -> int:
        """Risk score (0-100) for an event type."""
        return min(100, AuditService.RISK_SCORES.get(event_type, 0))

    @staticmethod
    def _level_for(risk_score: int) -> int:
        if risk_score >= 90:
            return logging.WARNING
        if risk_score >= 40:
            return logging.INFO
        return logging.DEBUG

    @staticmethod
    def log_event(
        event_type: SecurityEventEnum,
        ip_address: str = "unknown",
        user_agent: Optional[str] = None,
        key_hint: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> Optional[AuditEvent]:
        """
        Log a security event.

        Args:
            event_type: Type of security event
            ip_address: Client IP address
            user_agent: User agent string
            key_hint: Log-safe prefix of the token hash
            metadata: Additional metadata

        Returns:
            The logged event, or None if it could not be built
        """
        try:
            event = AuditEvent(
                event_type=event_type.value,
                risk_score=AuditService.calculate_risk_score(event_type),
                ip_address=ip_address,
                user_agent=user_agent,
                key_hint=key_hint,
                metadata=metadata,
            )
            logger.log(
                AuditService._level_for(event.risk_score),
                f"Security event {event.event_type} (risk {event.risk_score}) "
                f"for session {key_hint} from {ip_address}",
                extra={"audit_event": event.model_dump()},
            )
            return event
        except Exception as e:
            # Never fail the main operation due to audit logging failure
            logger.error(f"Failed to log audit event: {e}", exc_info=True)
            return None


# Singleton instance
audit_service = AuditService()
