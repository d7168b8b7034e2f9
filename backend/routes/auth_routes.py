import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_current_claim, require_admin
from backend.auth.jwt_handler import SessionClaim
from backend.core.config import Settings, get_settings
from backend.core.exceptions import InvalidCredentials, StoreError
from backend.database import get_db
from backend.services.authenticator import Authenticator
from backend.store import CredentialStore

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class SignUpRequest(BaseModel):
    name: str | None = Field(default=None, alias='donorName')
    email: str | None = Field(default=None, alias='donorEmail')
    password: str | None = Field(default=None, alias='donorPassword')
    date_of_birth: str | None = Field(default=None, alias='donorDOB')

    class Config:
        populate_by_name = True


class AddAdminRequest(BaseModel):
    name: str | None = Field(default=None, alias='adminName')
    email: str | None = Field(default=None, alias='adminEmail')
    password: str | None = Field(default=None, alias='adminPassword')
    date_of_birth: str | None = Field(default=None, alias='adminDOB')

    class Config:
        populate_by_name = True


class SignInRequest(BaseModel):
    email: str | None = None
    password: str | None = None


def get_authenticator(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Authenticator:
    store = CredentialStore(db, allow_plaintext_credentials=settings.allow_plaintext_credentials)
    return Authenticator(store, settings)


@router.post('/sign-up', status_code=status.HTTP_201_CREATED)
def sign_up(data: SignUpRequest, authenticator: Authenticator = Depends(get_authenticator)):
    donor_id = authenticator.register(data.name, data.email, data.password, data.date_of_birth)
    return {'success': True, 'message': 'User registered successfully.', 'id': donor_id}


@router.post('/add-admin', status_code=status.HTTP_201_CREATED)
def add_admin(
    data: AddAdminRequest,
    claim: SessionClaim = Depends(require_admin),
    authenticator: Authenticator = Depends(get_authenticator),
):
    admin_id = authenticator.register_admin(
        data.name,
        data.email,
        data.password,
        data.date_of_birth,
        created_by=claim,
    )
    return {'success': True, 'message': 'New admin added successfully.', 'id': admin_id}


@router.post('/sign-in')
def sign_in(data: SignInRequest, authenticator: Authenticator = Depends(get_authenticator)):
    try:
        result = authenticator.login(data.email, data.password)
    except InvalidCredentials as exc:
        return {'success': False, 'message': exc.message}
    except StoreError as exc:
        logger.error('Sign-in lookup failed', exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'error': True, 'message': 'Error querying database.'},
        )

    return {
        'success': True,
        'user': result.user,
        'access_token': result.access_token,
        'token_type': 'bearer',
    }


@router.get('/me')
def me(claim: SessionClaim = Depends(get_current_claim)):
    return {'success': True, 'user': claim.as_dict()}
