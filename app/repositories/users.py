"""Repositório de usuários - operações no banco"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.errors import DuplicateEmail
from app.models.user import User, UserRole, normalize_email


class UserRepository:
    """Acesso aos usuários no banco ativo"""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.client,
        phone: str = "",
    ) -> User:
        """Cria um usuário. A rota consulta find_by_email antes; o UNIQUE do e-mail garante o resto."""
        user = User(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            role=role,
            phone=(phone or "").strip(),
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateEmail("Este e-mail já está cadastrado.") from e

        self.session.refresh(user)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(
            select(User).where(User.email == normalize_email(email))
        ).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)
