# dashboard_server/routers/auth.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from ..actions import authenticate
from ..auth import SupabaseSignIn, ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from ..dependencies import get_sign_in
from ..models import ErrorResponse
from ..navigation import DASHBOARD_PATH

router = APIRouter(tags=["auth"])

def set_session_cookies(response: RedirectResponse, session) -> None:
    """Give the signed-in session to the browser; the server keeps no copy"""
    max_age = getattr(session, "expires_in", None)
    response.set_cookie(ACCESS_TOKEN_COOKIE, session.access_token, max_age=max_age, httponly=True, samesite="lax")
    response.set_cookie(REFRESH_TOKEN_COOKIE, session.refresh_token, httponly=True, samesite="lax")

@router.post("/login")
async def login(request: Request, sign_in: SupabaseSignIn = Depends(get_sign_in)):
    form = await request.form()
    sessions = []
    error = authenticate(
        {key: value for key, value in form.items()},
        sign_in=sign_in,
        on_session=sessions.append
    )
    if error:
        return JSONResponse(
            status_code=401,
            content=ErrorResponse(
                success=False,
                error=error,
                details="Invalid credentials."
            ).model_dump()
        )
    response = RedirectResponse(DASHBOARD_PATH, status_code=303)
    if sessions and sessions[0] is not None:
        set_session_cookies(response, sessions[0])
    return response
