import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.core.config import CORS_ORIGINS, DATABASE_URL, FALLBACK_DATABASE_URL, LOG_LEVEL, PORT
from app.core.errors import register_exception_handlers
from app.database import Database, DatabaseUnavailable
from app.routers import appointments, auth, users

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Iniciando aplicação...")
    if getattr(app.state, "database", None) is None:
        try:
            app.state.database = Database.connect(DATABASE_URL, FALLBACK_DATABASE_URL)
        except DatabaseUnavailable:
            logger.critical("Erro fatal ao inicializar banco de dados")
            raise

    yield
    logger.info("Encerrando aplicação...")


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(title="Corte Fácil API", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(auth.router)
    app.include_router(appointments.router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Backend rodando com sucesso!"

    return app


app = create_app()


if __name__ == "__main__":
    logger.info(f"Servidor backend rodando na porta {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
