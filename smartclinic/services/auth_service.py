from typing import Optional, Union
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from smartclinic.core.config import settings
from smartclinic.core.exceptions import Unauthorized
from smartclinic.core.logger import logger
from smartclinic.core.redis import redis_client
from smartclinic.core.security import create_access_token, decode_access_token, verify_password
from smartclinic.db.models import Admin, Doctor, Patient
from smartclinic.schemas.auth import AdminLogin, Login, LoginResponse, Principal

User = Union[Admin, Doctor, Patient]

ROLE_ADMIN = "admin"
ROLE_DOCTOR = "doctor"
ROLE_PATIENT = "patient"

class AuthService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find_user(self, role: str, identifier: str) -> Optional[User]:
        if role == ROLE_ADMIN:
            stmt = select(Admin).where(Admin.username == identifier)
        elif role == ROLE_DOCTOR:
            stmt = select(Doctor).where(Doctor.email == identifier)
        elif role == ROLE_PATIENT:
            stmt = select(Patient).where(Patient.email == identifier)
        else:
            return None
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def _issue_token(self, role: str, identifier: str, user_id: UUID) -> LoginResponse:
        access_token = create_access_token(
            data={"sub": identifier, "role": role, "uid": str(user_id)}
        )

        token_data = {
            "user_id": str(user_id),
            "role": role,
        }
        await redis_client.set_token(
            access_token,
            token_data,
            settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )

        return LoginResponse(access_token=access_token, role=role)

    async def _login(self, role: str, identifier: str, password: str) -> LoginResponse:
        user = await self._find_user(role, identifier)
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"Failed {role} login for '{identifier}'")
            raise Unauthorized("Invalid credentials")
        return await self._issue_token(role, identifier, user.id)

    async def login_admin(self, login_data: AdminLogin) -> LoginResponse:
        return await self._login(ROLE_ADMIN, login_data.username, login_data.password)

    async def login_doctor(self, login_data: Login) -> LoginResponse:
        return await self._login(ROLE_DOCTOR, login_data.identifier, login_data.password)

    async def login_patient(self, login_data: Login) -> LoginResponse:
        return await self._login(ROLE_PATIENT, login_data.identifier, login_data.password)

    async def logout(self, token: str) -> bool:
        return await redis_client.delete_token(token)

    async def resolve_principal(self, token: str) -> Optional[Principal]:
        """
        Claims for a token that is correctly signed, unexpired, not revoked and
        whose subject still exists. None otherwise.
        """
        try:
            payload = decode_access_token(token)
        except jwt.PyJWTError:
            return None

        identifier = payload.get("sub")
        role = payload.get("role")
        if not identifier or not role:
            return None

        stored = await redis_client.get_token(token)
        if stored is None or stored.get("role") != role:
            return None

        user = await self._find_user(role, identifier)
        if user is None or str(user.id) != payload.get("uid"):
            return None

        return Principal(role=role, identifier=identifier, user_id=user.id)

    async def _resolve_user(self, token: str, role: str, model) -> Optional[User]:
        principal = await self.resolve_principal(token)
        if principal is None or principal.role != role:
            return None
        return await self.session.get(model, principal.user_id)

    async def resolve_admin(self, token: str) -> Optional[Admin]:
        return await self._resolve_user(token, ROLE_ADMIN, Admin)

    async def resolve_doctor(self, token: str) -> Optional[Doctor]:
        return await self._resolve_user(token, ROLE_DOCTOR, Doctor)

    async def resolve_patient(self, token: str) -> Optional[Patient]:
        return await self._resolve_user(token, ROLE_PATIENT, Patient)
