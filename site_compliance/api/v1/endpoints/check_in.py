"""
Check-in Endpoints - Public site check-in form backend
"""
from typing import Optional
from fastapi import APIRouter, Cookie, Depends, Response, status
from sqlalchemy.orm import Session

from site_compliance.db.session import get_db
from site_compliance.services.check_in_service import CheckInService
from site_compliance.services.csrf_service import CsrfService
from site_compliance.schemas import CheckInRequest, CheckInResult, CsrfTokenResponse, DataResponse
from site_compliance.core.config import settings

router = APIRouter()
check_in_service = CheckInService()
csrf_service = CsrfService()


@router.get(
    "/csrf-token",
    response_model=DataResponse[CsrfTokenResponse],
    status_code=status.HTTP_200_OK
)
async def get_csrf_token(response: Response):
    """
    Issue a CSRF token for the check-in form

    The token is set as the csrf_token cookie and returned in the body;
    the form must echo it back as csrfToken.
    """
    token = csrf_service.issue_token()
    response.set_cookie(
        key=settings.CSRF_COOKIE_NAME,
        value=token,
        max_age=settings.CSRF_TOKEN_TTL_SECONDS,
        httponly=True,
        secure=settings.CSRF_COOKIE_SECURE,
        samesite="strict"
    )

    return DataResponse(
        success=True,
        message="CSRF token issued",
        data=CsrfTokenResponse(token=token)
    )


@router.post(
    "",
    response_model=CheckInResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK
)
async def submit_check_in(
    request: CheckInRequest,
    csrf_cookie: Optional[str] = Cookie(None, alias=settings.CSRF_COOKIE_NAME),
    db: Session = Depends(get_db)
):
    """
    Check a worker in to the nearest active job site

    **Authentication:**
    - Public; protected by the CSRF cookie/body token pair and a honeypot field

    **Response:**
    - `{success: true, message}` on entry (message may carry an expiry warning)
    - `{errors: {form|email|location: message}}` on any denial
    """
    return await check_in_service.check_in(db, request, csrf_cookie)
