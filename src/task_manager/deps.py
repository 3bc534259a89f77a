"""FastAPI dependencies; everything comes from the AppState on app.state."""

from fastapi import Depends, HTTPException, Request, status

from .models import AuthSession
from .state import AppState


def get_state(request: Request) -> AppState:
    return request.app.state.app_state


def require_session(state: AppState = Depends(get_state)) -> AuthSession:
    """Active session, or a redirect to the login page."""
    session = state.auth.current_session()
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            headers={"Location": "/login"},
        )
    return session
