from pydantic import BaseModel
from uuid import UUID

class AdminLogin(BaseModel):
    username: str
    password: str

class Login(BaseModel):
    # email for doctors and patients
    identifier: str
    password: str

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    message: str = "Login successful"

class MessageResponse(BaseModel):
    message: str

class Principal(BaseModel):
    """Claims of the caller, resolved from the bearer token on every request."""
    role: str # admin, doctor, patient
    identifier: str
    user_id: UUID
