from datetime import date as Date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Index
from sqlmodel import SQLModel, Field


# horários fixos de atendimento
DAILY_TIME_SLOTS = ("09:00", "10:00", "11:00", "14:00", "15:00", "16:00", "17:00")

DEFAULT_PRICE = Decimal("25.00")
UNASSIGNED_BARBER = "unassigned"


class ServiceType(str, Enum):
    haircut = "haircut"
    beard = "beard"
    haircut_beard = "haircut+beard"
    eyebrow = "eyebrow"
    mustache = "mustache"
    wash = "wash"


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


# status que ocupam o horário
ACTIVE_STATUSES = (AppointmentStatus.scheduled, AppointmentStatus.confirmed)

ALLOWED_TRANSITIONS = {
    AppointmentStatus.scheduled: {
        AppointmentStatus.confirmed,
        AppointmentStatus.cancelled,
        AppointmentStatus.completed,
    },
    AppointmentStatus.confirmed: {AppointmentStatus.cancelled, AppointmentStatus.completed},
    AppointmentStatus.cancelled: set(),
    AppointmentStatus.completed: set(),
}


def can_transition(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[AppointmentStatus(current)]


# um agendamento ativo por horário, com ou sem barbeiro
def build_slot_key(day: Date, time_slot: str) -> str:
    return f"{day.isoformat()}|{time_slot}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Appointment(SQLModel, table=True):
    __table_args__ = (
        Index("ix_appointment_date_time_slot", "date", "time_slot"),
        Index("ix_appointment_client_date", "client_id", "date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    client_id: int = Field(foreign_key="user.id", index=True)
    client_name: str  # cópia do nome no momento do agendamento

    barber_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)
    barber_name: str = UNASSIGNED_BARBER

    date: Date
    time_slot: str
    service: ServiceType = ServiceType.haircut

    status: AppointmentStatus = Field(default=AppointmentStatus.scheduled, index=True)

    notes: str = Field(default="", max_length=500)
    price: Decimal = Field(default=DEFAULT_PRICE, ge=0, max_digits=10, decimal_places=2)

    # preenchido só enquanto o status é ativo; o UNIQUE impede reserva dupla
    slot_key: Optional[str] = Field(default=None, unique=True)

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def formatted_schedule(self) -> str:
        return f"{self.date.strftime('%d/%m/%Y')} às {self.time_slot}"
