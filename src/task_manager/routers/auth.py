"""Mock login endpoint."""

from fastapi import APIRouter, HTTPException, status

from ..models import LoginRequest, LoginResponse
from ..services import build_user, issue_token
from ..validation import validate_credentials

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest):
    """Accept any well-formed email and password; no session is stored here."""
    result = validate_credentials(credentials.email, credentials.password)
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.first_message,
        )
    user = build_user(credentials.email)
    return LoginResponse(user=user, token=issue_token(user.id))
