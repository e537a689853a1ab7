from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


class UserRole(str, Enum):
    client = "client"
    barber = "barber"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserBase(SQLModel):
    name: str
    email: str = Field(index=True, unique=True)  # sempre minúsculo e sem espaços
    phone: str = ""
    role: UserRole = UserRole.client


class User(UserBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
