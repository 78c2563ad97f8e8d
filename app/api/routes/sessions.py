from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import (
    get_request_fingerprint,
    get_session_token,
    require_valid_session,
)
from app.api.middleware.security import extract_client_ip
from app.domain.schemas.session import (
    BindSessionRequest,
    MessageResponse,
    SessionStatusResponse,
    VerificationResult,
    VerifySessionRequest,
)
from app.infrastructure.redis.binding_store import (
    SessionBindingStore,
    get_binding_store,
)
from app.application.use_cases import (
    check_session as check_session_uc,
    establish_session as establish_session_uc,
)

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.post(
    "/bind",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def bind_endpoint(
    request: BindSessionRequest,
    http_request: Request,
    store: SessionBindingStore = Depends(get_binding_store),
) -> MessageResponse:
    # Fire-and-forget: the response never reveals whether the store took the write
    await establish_session_uc.establish_session(
        store=store,
        token=request.token,
        fingerprint=request.fingerprint,
        ip_address=extract_client_ip(http_request),
        user_agent=http_request.headers.get("User-Agent"),
    )
    return MessageResponse(message="Session binding accepted")


@router.post(
    "/verify",
    response_model=VerificationResult,
    response_model_exclude_unset=True,
)
async def verify_endpoint(
    http_request: Request,
    request: Optional[VerifySessionRequest] = None,
    token: Optional[str] = Depends(get_session_token),
    store: SessionBindingStore = Depends(get_binding_store),
) -> VerificationResult:
    fingerprint = request.fingerprint if request and request.fingerprint else None
    if not fingerprint:
        fingerprint = get_request_fingerprint(http_request)

    return await check_session_uc.check_session(
        store=store,
        token=token,
        fingerprint=fingerprint,
        ip_address=extract_client_ip(http_request),
        user_agent=http_request.headers.get("User-Agent"),
    )


@router.get("/me", response_model=SessionStatusResponse)
async def session_status_endpoint(
    result: VerificationResult = Depends(require_valid_session),
) -> SessionStatusResponse:
    return SessionStatusResponse(
        bound=result.received_fingerprint is not None,
        valid=result.valid,
    )
