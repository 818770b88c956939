from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from smartclinic.api.deps import get_principal, oauth2_scheme
from smartclinic.db.session import get_session
from smartclinic.schemas.auth import AdminLogin, Login, LoginResponse, MessageResponse, Principal
from smartclinic.services.auth_service import AuthService

router = APIRouter()

async def get_auth_service(session: AsyncSession = Depends(get_session)) -> AuthService:
    return AuthService(session)

@router.post("/admin/login", response_model=LoginResponse)
async def admin_login(
    login_data: AdminLogin,
    service: AuthService = Depends(get_auth_service)
):
    return await service.login_admin(login_data)

@router.post("/doctor/login", response_model=LoginResponse)
async def doctor_login(
    login_data: Login,
    service: AuthService = Depends(get_auth_service)
):
    return await service.login_doctor(login_data)

@router.post("/patient/login", response_model=LoginResponse)
async def patient_login(
    login_data: Login,
    service: AuthService = Depends(get_auth_service)
):
    return await service.login_patient(login_data)

@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(oauth2_scheme),
    principal: Principal = Depends(get_principal),
    service: AuthService = Depends(get_auth_service)
):
    await service.logout(token)
    return MessageResponse(message="Logged out")

@router.get("/me", response_model=Principal)
async def read_principal(principal: Principal = Depends(get_principal)):
    return principal
