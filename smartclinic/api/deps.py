from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from smartclinic.core.config import settings
from smartclinic.core.exceptions import Forbidden, Unauthorized
from smartclinic.db.models import Admin, Doctor, Patient
from smartclinic.db.session import get_session
from smartclinic.schemas.auth import Principal
from smartclinic.services.auth_service import AuthService, ROLE_ADMIN, ROLE_DOCTOR, ROLE_PATIENT

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/patient/login")

async def get_principal(
    token: str = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_session)
) -> Principal:
    principal = await AuthService(session).resolve_principal(token)
    if principal is None:
        raise Unauthorized("Invalid or expired token")
    return principal

def require_role(*roles: str):
    async def dependency(principal: Principal = Depends(get_principal)) -> Principal:
        if principal.role not in roles:
            raise Forbidden(f"This action requires one of the roles: {', '.join(roles)}")
        return principal
    return dependency

async def get_current_admin(
    principal: Principal = Depends(require_role(ROLE_ADMIN)),
    token: str = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_session)
) -> Admin:
    admin = await AuthService(session).resolve_admin(token)
    if admin is None:
        raise Unauthorized()
    return admin

async def get_current_doctor(
    principal: Principal = Depends(require_role(ROLE_DOCTOR)),
    token: str = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_session)
) -> Doctor:
    doctor = await AuthService(session).resolve_doctor(token)
    if doctor is None:
        raise Unauthorized()
    return doctor

async def get_current_patient(
    principal: Principal = Depends(require_role(ROLE_PATIENT)),
    token: str = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_session)
) -> Patient:
    patient = await AuthService(session).resolve_patient(token)
    if patient is None:
        raise Unauthorized()
    return patient
