import logging
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status

from app.core.errors import Forbidden, NotFound, SlotTaken, ValidationError
from app.core.notifications import notify_client
from app.deps import get_appointment_repository, get_user_repository
from app.models.appointment import (
    ACTIVE_STATUSES,
    DAILY_TIME_SLOTS,
    UNASSIGNED_BARBER,
    Appointment,
    AppointmentStatus,
)
from app.models.user import UserRole
from app.repositories.appointments import SLOT_TAKEN_MESSAGE, AppointmentRepository
from app.repositories.users import UserRepository
from app.schemas import AppointmentCancel, AppointmentCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/usuarios", tags=["appointments"])


# =========================
# CRIAR AGENDAMENTO (CLIENTE)
# =========================
@router.post("/agendamentos", status_code=status.HTTP_201_CREATED)
def create_appointment(
    appointment: AppointmentCreate,
    users: UserRepository = Depends(get_user_repository),
    appointments: AppointmentRepository = Depends(get_appointment_repository),
):
    if (
        appointment.client_id is None
        or appointment.date is None
        or not appointment.time_slot
        or appointment.service is None
    ):
        raise ValidationError("Todos os campos obrigatórios devem ser preenchidos.")

    client = users.find_by_id(appointment.client_id)
    if not client:
        raise NotFound("Cliente não encontrado.")

    # barbeiro é opcional: sem ele o agendamento fica "unassigned"
    barber_name = UNASSIGNED_BARBER
    if appointment.barber_id is not None:
        barber = users.find_by_id(appointment.barber_id)
        if not barber or barber.role != UserRole.barber:
            raise NotFound("Barbeiro não encontrado.")
        barber_name = barber.name

    # hoje é permitido, qualquer horário do dia
    if appointment.date < date.today():
        raise ValidationError("A data do agendamento deve ser hoje ou no futuro.")

    if appointment.time_slot not in DAILY_TIME_SLOTS:
        raise ValidationError("Horário inválido.")

    # a loja atende um cliente por horário, com ou sem barbeiro definido
    conflict = appointments.check_availability(appointment.date, appointment.time_slot)
    if conflict:
        raise SlotTaken(SLOT_TAKEN_MESSAGE)

    db_appointment = appointments.create(
        client_id=client.id,
        client_name=client.name,
        barber_id=appointment.barber_id,
        barber_name=barber_name,
        date=appointment.date,
        time_slot=appointment.time_slot,
        service=appointment.service,
        notes=appointment.notes or "",
        status=AppointmentStatus.scheduled,
    )
    logger.info(
        f"Agendamento {db_appointment.id} criado para cliente {client.id} "
        f"em {db_appointment.formatted_schedule()}"
    )
    notify_client(client.id, f"Agendamento confirmado para {db_appointment.formatted_schedule()}.")

    return {
        "mensagem": "Agendamento criado com sucesso!",
        "agendamento": {
            "id": db_appointment.id,
            "date": db_appointment.date.isoformat(),
            "timeSlot": db_appointment.time_slot,
            "service": db_appointment.service.value,
            "status": db_appointment.status.value,
            "clientName": db_appointment.client_name,
            "barberName": db_appointment.barber_name,
            "price": str(db_appointment.price),
        },
    }


# =========================
# LISTAR AGENDAMENTOS DO CLIENTE
# =========================
@router.get("/agendamentos/{client_id}")
def list_appointments(
    client_id: int,
    appointments: AppointmentRepository = Depends(get_appointment_repository),
):
    return {
        "agendamentos": [
            {
                "id": a.id,
                "date": a.date.isoformat(),
                "timeSlot": a.time_slot,
                "service": a.service.value,
                "status": a.status.value,
                "barberName": a.barber_name,
                "notes": a.notes,
                "createdAt": a.created_at.isoformat(),
            }
            for a in appointments.find_by_client(client_id)
        ]
    }


# =========================
# AGENDA DO BARBEIRO
# =========================
@router.get("/barbeiros/{barber_id}/agendamentos")
def list_barber_appointments(
    barber_id: int,
    users: UserRepository = Depends(get_user_repository),
    appointments: AppointmentRepository = Depends(get_appointment_repository),
):
    barber = users.find_by_id(barber_id)
    if not barber or barber.role != UserRole.barber:
        raise NotFound("Barbeiro não encontrado.")

    return {
        "agendamentos": [
            {
                "id": a.id,
                "date": a.date.isoformat(),
                "timeSlot": a.time_slot,
                "service": a.service.value,
                "status": a.status.value,
                "clientName": a.client_name,
                "notes": a.notes,
            }
            for a in appointments.find_by_barber(barber_id)
        ]
    }


# =========================
# CANCELAR AGENDAMENTO
# - somente o cliente dono do agendamento
# =========================
@router.put("/agendamentos/{appointment_id}/cancelar")
def cancel_appointment(
    appointment_id: int,
    body: Optional[AppointmentCancel] = None,
    appointments: AppointmentRepository = Depends(get_appointment_repository),
):
    if body is None or body.client_id is None:
        raise ValidationError("ID do agendamento e cliente são obrigatórios.")

    appt = appointments.find_by_id(appointment_id)
    if not appt:
        raise NotFound("Agendamento não encontrado.")

    if appt.client_id != body.client_id:
        raise Forbidden("Você não tem permissão para cancelar este agendamento.")

    if appt.status == AppointmentStatus.cancelled:
        raise ValidationError("Este agendamento já foi cancelado.")

    if appt.status == AppointmentStatus.completed:
        raise ValidationError("Não é possível cancelar um agendamento já concluído.")

    appt = appointments.update_status(appointment_id, AppointmentStatus.cancelled)
    logger.info(f"Agendamento {appointment_id} cancelado pelo cliente {body.client_id}")
    notify_client(appt.client_id, f"Agendamento de {appt.formatted_schedule()} cancelado.")

    return {"mensagem": "Agendamento cancelado com sucesso!"}


# =========================
# HORÁRIOS DISPONÍVEIS (dia)
# GET /api/usuarios/horarios-disponiveis?date=2026-02-14
# =========================
@router.get("/horarios-disponiveis")
def list_available_slots(
    date: Optional[date] = None,
    appointments: AppointmentRepository = Depends(get_appointment_repository),
) -> Dict[str, List[str]]:
    if date is None:
        raise ValidationError("Data é obrigatória.")

    return {"horariosDisponiveis": available_slots(appointments.find_by_date(date))}


def available_slots(day_appointments: List[Appointment]) -> List[str]:
    taken = {a.time_slot for a in day_appointments if a.status in ACTIVE_STATUSES}
    return [slot for slot in DAILY_TIME_SLOTS if slot not in taken]
