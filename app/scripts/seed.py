import os

from sqlmodel import Session

from app.core.config import DATABASE_URL, FALLBACK_DATABASE_URL
from app.core.security import get_password_hash
from app.database import Database
from app.models.user import User, UserRole
from app.repositories.users import UserRepository


BARBER_NAME = "João Silva"
BARBER_EMAIL = "barbeiro@cortefacil.com"
BARBER_PASSWORD = os.getenv("SEED_BARBER_PASSWORD", "barbeiro123")


def seed(session: Session) -> User:
    users = UserRepository(session)

    # 1) barbeiro padrão (só cria se não existir)
    barber = users.find_by_email(BARBER_EMAIL)
    if barber:
        if barber.role != UserRole.barber:
            raise RuntimeError(f"Usuário {BARBER_EMAIL} existe mas role != 'barber'")
        return barber

    return users.create(
        name=BARBER_NAME,
        email=BARBER_EMAIL,
        password_hash=get_password_hash(BARBER_PASSWORD),
        role=UserRole.barber,
    )


def main():
    database = Database.connect(DATABASE_URL, FALLBACK_DATABASE_URL)
    with database.session() as session:
        barber = seed(session)

    print("✅ Seed concluído!")
    print(f"Barber: {barber.id} ({barber.email})")


if __name__ == "__main__":
    main()
