import logging

from fastapi import APIRouter, HTTPException, Request

from portal.auth.schemas import AdminCheckResponse, LoginRequest, LoginResponse, LogoutResponse
from portal.auth.service import auth_service
from portal.errors import INTERNAL_ERROR

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["authentication"]
)

@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, request: Request):
    """
    Authenticate the administrator and mark the session as admin.
    """
    try:
        if auth_service.verify_credentials(payload.username, payload.password):
            auth_service.login(request.session)
            logger.info("Admin login succeeded")
            return {'success': True, 'message': 'Login successful'}
    except Exception as e:
        logger.error(f"Error during login: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    logger.warning("Admin login failed: invalid credentials")
    raise HTTPException(status_code=401, detail="Invalid credentials")

@router.post("/logout", response_model=LogoutResponse)
async def logout(request: Request):
    auth_service.logout(request.session)
    return {'message': 'Logged out successfully'}

@router.get("/check", response_model=AdminCheckResponse, response_model_by_alias=True)
async def check_admin(request: Request):
    """Report whether the current session is authenticated. Never returns 401."""
    return {'isAdmin': auth_service.is_admin(request.session)}
