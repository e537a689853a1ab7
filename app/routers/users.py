import logging

from fastapi import APIRouter, Depends, status

from app.core.errors import DuplicateEmail, ValidationError
from app.core.security import get_password_hash
from app.deps import get_user_repository
from app.models.user import UserRole
from app.repositories.users import UserRepository
from app.schemas import UserRegister

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/usuarios", tags=["users"])

MIN_PASSWORD_LENGTH = 6


# mesma rota com os dois nomes usados pelo front
@router.post("/cadastrar", status_code=status.HTTP_201_CREATED)
@router.post("/cadastro", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def register(
    user: UserRegister,
    users: UserRepository = Depends(get_user_repository),
):
    name = (user.name or "").strip()
    email = (user.email or "").strip()
    password = user.password or ""

    if not name or not email or not password:
        raise ValidationError("Todos os campos são obrigatórios.")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres."
        )

    if users.find_by_email(email):
        raise DuplicateEmail("Este e-mail já está cadastrado.")

    db_user = users.create(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=user.role or UserRole.client,
        phone=user.phone or "",
    )
    logger.info(f"Usuário cadastrado: id={db_user.id} role={UserRole(db_user.role).value}")

    return {"mensagem": "Usuário cadastrado com sucesso!"}
