"""Repositório de agendamentos - operações no banco"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.errors import InvalidStatusTransition, SlotTaken
from app.models.appointment import (
    ACTIVE_STATUSES,
    Appointment,
    AppointmentStatus,
    build_slot_key,
    can_transition,
)

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "Este horário já está ocupado."


class AppointmentRepository:
    """Acesso aos agendamentos no banco ativo"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, **fields) -> Appointment:
        """
        Cria um agendamento.
        Agendamentos ativos recebem slot_key: uma reserva concorrente do mesmo
        horário falha no UNIQUE em vez de duplicar.
        """
        appointment = Appointment(**fields)
        if AppointmentStatus(appointment.status) in ACTIVE_STATUSES:
            appointment.slot_key = build_slot_key(appointment.date, appointment.time_slot)

        self.session.add(appointment)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Horário já reservado: {fields.get('date')} {fields.get('time_slot')}")
            raise SlotTaken(SLOT_TAKEN_MESSAGE) from e

        self.session.refresh(appointment)
        return appointment

    def find_by_id(self, appointment_id: int) -> Optional[Appointment]:
        return self.session.get(Appointment, appointment_id)

    def find_by_client(self, client_id: int) -> List[Appointment]:
        return self.session.exec(
            select(Appointment)
            .where(Appointment.client_id == client_id)
            .order_by(Appointment.date, Appointment.time_slot)
        ).all()

    def find_by_barber(self, barber_id: int) -> List[Appointment]:
        return self.session.exec(
            select(Appointment)
            .where(Appointment.barber_id == barber_id)
            .order_by(Appointment.date, Appointment.time_slot)
        ).all()

    def find_by_date(self, day: date) -> List[Appointment]:
        """Todos os agendamentos do dia, qualquer status"""
        return self.session.exec(
            select(Appointment)
            .where(Appointment.date == day)
            .order_by(Appointment.time_slot)
        ).all()

    def check_availability(
        self, day: date, time_slot: str, barber_id: Optional[int] = None
    ) -> Optional[Appointment]:
        """Agendamento ativo que ocupa o horário, ou None se estiver livre"""
        stmt = select(Appointment).where(
            Appointment.date == day,
            Appointment.time_slot == time_slot,
            Appointment.status.in_(ACTIVE_STATUSES),
        )
        if barber_id is not None:
            stmt = stmt.where(Appointment.barber_id == barber_id)

        return self.session.exec(stmt).first()

    def update_status(
        self, appointment_id: int, new_status: AppointmentStatus
    ) -> Optional[Appointment]:
        appointment = self.find_by_id(appointment_id)
        if appointment is None:
            return None

        if not can_transition(appointment.status, new_status):
            raise InvalidStatusTransition(
                f"Não é possível alterar um agendamento {AppointmentStatus(appointment.status).value} "
                f"para {AppointmentStatus(new_status).value}."
            )

        appointment.status = new_status
        if new_status in ACTIVE_STATUSES:
            appointment.slot_key = build_slot_key(appointment.date, appointment.time_slot)
        else:
            appointment.slot_key = None  # libera o horário
        appointment.updated_at = datetime.now(timezone.utc)

        self.session.add(appointment)
        self.session.commit()
        self.session.refresh(appointment)
        return appointment
