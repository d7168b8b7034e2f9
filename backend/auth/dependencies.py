import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.auth import jwt_handler
from backend.auth.jwt_handler import SessionClaim
from backend.core.config import Settings, get_settings
from backend.core.exceptions import Forbidden, InvalidToken, Unauthorized
from backend.store import Role

# Missing credentials are reported by get_current_claim, not by FastAPI.
security = HTTPBearer(auto_error=False)


def verify_token(token: str, settings: Settings) -> SessionClaim:
    try:
        payload = jwt_handler.decode_access_token(token, settings)
    except jwt.PyJWTError as exc:
        raise InvalidToken() from exc

    try:
        claim = SessionClaim(
            id=int(payload["id"]),
            name=str(payload["name"]),
            email=str(payload["sub"]),
            role=str(payload["role"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidToken() from exc

    if claim.role not in {role.value for role in Role}:
        raise InvalidToken()
    return claim


def get_current_claim(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> SessionClaim:
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    return verify_token(credentials.credentials, settings)


def require_admin(claim: SessionClaim = Depends(get_current_claim)) -> SessionClaim:
    if claim.role != Role.ADMIN.value:
        raise Forbidden()
    return claim
