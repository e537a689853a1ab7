import os

os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import date, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Database  # noqa: E402
from app.main import create_app  # noqa: E402


@pytest.fixture
def database(tmp_path):
    db = Database.connect(f"sqlite:///{tmp_path / 'test.db'}")
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session() as session:
        yield session


@pytest.fixture
def client(database):
    app = create_app(database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)


@pytest.fixture
def register_user(client):
    """Cadastra e faz login, devolvendo o resumo do usuário"""

    def _register(name="Maria Souza", email="maria@example.com", password="segredo123", **extra):
        payload = {"name": name, "email": email, "password": password, **extra}
        response = client.post("/api/usuarios/cadastrar", json=payload)
        assert response.status_code == 201, response.text

        login = client.post("/api/usuarios/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return login.json()["usuario"]

    return _register


@pytest.fixture
def book(client):
    def _book(client_id, day, time_slot="10:00", service="haircut", **extra):
        payload = {
            "clientId": client_id,
            "date": day.isoformat(),
            "timeSlot": time_slot,
            "service": service,
            **extra,
        }
        return client.post("/api/usuarios/agendamentos", json=payload)

    return _book
