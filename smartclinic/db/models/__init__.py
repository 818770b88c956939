from sqlmodel import SQLModel
from .admin import Admin
from .doctor import Doctor
from .patient import Patient
from .appointment import Appointment
from .prescription import Prescription

__all__ = [
    "SQLModel",
    "Admin",
    "Doctor",
    "Patient",
    "Appointment",
    "Prescription",
]
