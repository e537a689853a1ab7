from datetime import date as Date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.appointment import ServiceType
from app.models.user import UserRole


# campos obrigatórios são opcionais aqui para a rota responder com a mensagem própria


class UserRegister(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = ""
    role: Optional[UserRole] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AppointmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_id: Optional[int] = Field(default=None, alias="clientId")
    date: Optional[Date] = None
    time_slot: Optional[str] = Field(default=None, alias="timeSlot")
    service: Optional[ServiceType] = None
    notes: Optional[str] = Field(default=None, max_length=500)
    barber_id: Optional[int] = Field(default=None, alias="barberId")


class AppointmentCancel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_id: Optional[int] = Field(default=None, alias="clientId")
