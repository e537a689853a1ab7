import logging

from fastapi import APIRouter, Depends

from app.core.errors import Unauthorized, ValidationError
from app.core.security import create_session_token, verify_password
from app.deps import get_user_repository
from app.models.user import UserRole
from app.repositories.users import UserRepository
from app.schemas import UserLogin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/usuarios", tags=["auth"])

# mesma resposta para e-mail inexistente e senha errada
INVALID_CREDENTIALS = "E-mail ou senha incorretos."


@router.post("/login")
def login(
    credentials: UserLogin,
    users: UserRepository = Depends(get_user_repository),
):
    if not credentials.email or not credentials.password:
        raise ValidationError("E-mail e senha são obrigatórios.")

    user = users.find_by_email(credentials.email)

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning("Tentativa de login com credenciais inválidas")
        raise Unauthorized(INVALID_CREDENTIALS)

    token = create_session_token(user)

    return {
        "mensagem": "Login realizado com sucesso!",
        "token": token,
        "usuario": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": UserRole(user.role).value,
        },
    }
