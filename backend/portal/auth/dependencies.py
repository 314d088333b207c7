from fastapi import HTTPException, Request

from portal.auth.service import auth_service


def require_admin(request: Request) -> bool:
    """
    Guard for admin-only routes.

    Raises:
        HTTPException: 401 if the session has not been authenticated
    """
    if not auth_service.is_admin(request.session):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return True
