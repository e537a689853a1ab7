import logging
from typing import Iterator, Optional

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger(__name__)

# falha de conexão ou driver DB-API ausente
CONNECTION_ERRORS = (SQLAlchemyError, ImportError)


class DatabaseUnavailable(RuntimeError):
    pass


def _safe_url(url: str) -> str:
    return make_url(url).render_as_string(hide_password=True)


def _open_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False  # SQLite + FastAPI

    engine = create_engine(url, echo=False, pool_pre_ping=True, connect_args=connect_args)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        engine.dispose()
        raise
    return engine


class Database:
    """Conexão ativa do processo: criada uma vez no startup e injetada nas rotas."""

    def __init__(self, engine: Engine, url: str, is_fallback: bool = False):
        self.engine = engine
        self.url = url
        self.is_fallback = is_fallback

    @classmethod
    def connect(cls, primary_url: str, fallback_url: Optional[str] = None) -> "Database":
        try:
            database = cls(_open_engine(primary_url), primary_url)
        except CONNECTION_ERRORS as primary_error:
            if not fallback_url:
                raise DatabaseUnavailable(
                    f"Banco principal indisponível: {primary_error}"
                ) from primary_error

            logger.warning(f"Banco principal indisponível, usando fallback: {primary_error}")
            try:
                database = cls(_open_engine(fallback_url), fallback_url, is_fallback=True)
            except CONNECTION_ERRORS as fallback_error:
                logger.error(f"Erro ao conectar com o banco de fallback: {fallback_error}")
                raise DatabaseUnavailable(
                    f"Nenhum banco de dados disponível: {fallback_error}"
                ) from fallback_error

        database.create_tables()
        logger.info(f"Banco de dados ativo: {_safe_url(database.url)}")
        return database

    def create_tables(self) -> None:
        # importa os modelos para registrar as tabelas no metadata
        from app.models import appointment, user  # noqa: F401

        SQLModel.metadata.create_all(self.engine)
        logger.info("Tabelas criadas/verificadas com sucesso")

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


# Dependency: uma sessão por request
def get_session(database: Database = Depends(get_database)) -> Iterator[Session]:
    with database.session() as session:
        yield session
