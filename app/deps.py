# app/deps.py

from fastapi import Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.appointments import AppointmentRepository
from app.repositories.users import UserRepository


def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)


def get_appointment_repository(session: Session = Depends(get_session)) -> AppointmentRepository:
    return AppointmentRepository(session)
