from datetime import date, timedelta

import pytest

from app.models.appointment import DAILY_TIME_SLOTS, AppointmentStatus
from app.repositories.appointments import AppointmentRepository


@pytest.fixture
def maria(register_user):
    return register_user(name="Maria", email="maria@example.com")


@pytest.fixture
def pedro(register_user):
    return register_user(name="Pedro", email="pedro@example.com")


def test_create_appointment(book, maria, tomorrow):
    response = book(maria["id"], tomorrow, "10:00", "haircut+beard", notes="Degradê")

    assert response.status_code == 201
    body = response.json()
    assert body["mensagem"] == "Agendamento criado com sucesso!"
    appointment = body["agendamento"]
    assert appointment["date"] == tomorrow.isoformat()
    assert appointment["timeSlot"] == "10:00"
    assert appointment["service"] == "haircut+beard"
    assert appointment["status"] == "scheduled"
    assert appointment["clientName"] == "Maria"
    assert appointment["barberName"] == "unassigned"
    assert appointment["price"] == "25.00"


def test_create_appointment_requires_fields(client, maria, tomorrow):
    response = client.post(
        "/api/usuarios/agendamentos",
        json={"clientId": maria["id"], "date": tomorrow.isoformat(), "service": "beard"},
    )

    assert response.status_code == 400
    assert response.json() == {"erro": "Todos os campos obrigatórios devem ser preenchidos."}


def test_create_appointment_unknown_client(book, tomorrow):
    response = book(999, tomorrow)

    assert response.status_code == 404
    assert response.json() == {"erro": "Cliente não encontrado."}


def test_create_appointment_rejects_past_date(book, maria):
    yesterday = date.today() - timedelta(days=1)

    response = book(maria["id"], yesterday)

    assert response.status_code == 400
    assert response.json() == {"erro": "A data do agendamento deve ser hoje ou no futuro."}


def test_create_appointment_accepts_today(book, maria):
    assert book(maria["id"], date.today(), "17:00").status_code == 201


def test_create_appointment_rejects_unknown_slot(book, maria, tomorrow):
    response = book(maria["id"], tomorrow, "12:30")

    assert response.status_code == 400
    assert response.json() == {"erro": "Horário inválido."}


def test_create_appointment_rejects_unknown_service(book, maria, tomorrow):
    response = book(maria["id"], tomorrow, service="massage")

    assert response.status_code == 400
    assert "service" in response.json()["erro"]


def test_create_appointment_notes_limit(book, maria, tomorrow):
    response = book(maria["id"], tomorrow, notes="x" * 501)

    assert response.status_code == 400


def test_same_slot_is_rejected_other_slot_is_free(book, maria, pedro, tomorrow):
    assert book(maria["id"], tomorrow, "10:00").status_code == 201

    taken = book(pedro["id"], tomorrow, "10:00")
    assert taken.status_code == 409
    assert taken.json() == {"erro": "Este horário já está ocupado."}

    assert book(pedro["id"], tomorrow, "11:00").status_code == 201


def test_create_appointment_with_barber(book, register_user, maria, tomorrow):
    barber = register_user(name="João Silva", email="joao@example.com", role="barber")

    response = book(maria["id"], tomorrow, barberId=barber["id"])

    assert response.status_code == 201
    assert response.json()["agendamento"]["barberName"] == "João Silva"


def test_create_appointment_barber_must_be_a_barber(book, maria, pedro, tomorrow):
    response = book(maria["id"], tomorrow, barberId=pedro["id"])

    assert response.status_code == 404
    assert response.json() == {"erro": "Barbeiro não encontrado."}


@pytest.fixture
def joao(register_user):
    return register_user(name="João Silva", email="joao@example.com", role="barber")


def test_unassigned_booking_blocks_barber_booking(client, book, maria, pedro, joao, tomorrow):
    assert book(maria["id"], tomorrow, "10:00").status_code == 201

    response = book(pedro["id"], tomorrow, "10:00", barberId=joao["id"])

    assert response.status_code == 409
    assert response.json() == {"erro": "Este horário já está ocupado."}
    slots = client.get("/api/usuarios/horarios-disponiveis", params={"date": tomorrow.isoformat()})
    assert "10:00" not in slots.json()["horariosDisponiveis"]


def test_barber_booking_blocks_unassigned_booking(book, maria, pedro, joao, tomorrow):
    assert book(maria["id"], tomorrow, "10:00", barberId=joao["id"]).status_code == 201

    response = book(pedro["id"], tomorrow, "10:00")

    assert response.status_code == 409
    assert response.json() == {"erro": "Este horário já está ocupado."}


def test_list_barber_appointments(client, book, maria, joao, tomorrow):
    book(maria["id"], tomorrow, "15:00", barberId=joao["id"])
    book(maria["id"], tomorrow, "09:00", barberId=joao["id"])
    book(maria["id"], tomorrow, "11:00")

    response = client.get(f"/api/usuarios/barbeiros/{joao['id']}/agendamentos")

    assert response.status_code == 200
    appointments = response.json()["agendamentos"]
    assert [a["timeSlot"] for a in appointments] == ["09:00", "15:00"]
    assert appointments[0]["clientName"] == "Maria"


def test_list_barber_appointments_unknown_barber(client, maria):
    response = client.get(f"/api/usuarios/barbeiros/{maria['id']}/agendamentos")

    assert response.status_code == 404
    assert response.json() == {"erro": "Barbeiro não encontrado."}


def test_list_appointments_sorted_by_date_then_slot(client, book, maria, pedro, tomorrow):
    later = tomorrow + timedelta(days=1)
    book(maria["id"], later, "09:00")
    book(maria["id"], tomorrow, "15:00")
    book(maria["id"], tomorrow, "09:00")
    book(pedro["id"], tomorrow, "11:00")

    response = client.get(f"/api/usuarios/agendamentos/{maria['id']}")

    assert response.status_code == 200
    appointments = response.json()["agendamentos"]
    assert [(a["date"], a["timeSlot"]) for a in appointments] == [
        (tomorrow.isoformat(), "09:00"),
        (tomorrow.isoformat(), "15:00"),
        (later.isoformat(), "09:00"),
    ]
    assert set(appointments[0]) == {
        "id",
        "date",
        "timeSlot",
        "service",
        "status",
        "barberName",
        "notes",
        "createdAt",
    }


def test_list_appointments_empty_for_client_without_bookings(client):
    response = client.get("/api/usuarios/agendamentos/42")

    assert response.status_code == 200
    assert response.json() == {"agendamentos": []}


def test_list_appointments_invalid_client_id(client):
    assert client.get("/api/usuarios/agendamentos/abc").status_code == 400


def test_cancel_appointment(client, book, maria, tomorrow):
    appointment_id = book(maria["id"], tomorrow).json()["agendamento"]["id"]

    response = client.put(
        f"/api/usuarios/agendamentos/{appointment_id}/cancelar", json={"clientId": maria["id"]}
    )

    assert response.status_code == 200
    assert response.json() == {"mensagem": "Agendamento cancelado com sucesso!"}
    listed = client.get(f"/api/usuarios/agendamentos/{maria['id']}").json()["agendamentos"]
    assert listed[0]["status"] == "cancelled"


def test_cancel_twice_returns_400(client, book, maria, tomorrow):
    appointment_id = book(maria["id"], tomorrow).json()["agendamento"]["id"]
    url = f"/api/usuarios/agendamentos/{appointment_id}/cancelar"
    client.put(url, json={"clientId": maria["id"]})

    response = client.put(url, json={"clientId": maria["id"]})

    assert response.status_code == 400
    assert response.json() == {"erro": "Este agendamento já foi cancelado."}


def test_cancel_completed_returns_400(client, session, book, maria, tomorrow):
    appointment_id = book(maria["id"], tomorrow).json()["agendamento"]["id"]
    AppointmentRepository(session).update_status(appointment_id, AppointmentStatus.completed)

    response = client.put(
        f"/api/usuarios/agendamentos/{appointment_id}/cancelar", json={"clientId": maria["id"]}
    )

    assert response.status_code == 400
    assert response.json() == {"erro": "Não é possível cancelar um agendamento já concluído."}


def test_cancel_someone_elses_appointment_returns_403(client, book, maria, pedro, tomorrow):
    appointment_id = book(maria["id"], tomorrow).json()["agendamento"]["id"]

    response = client.put(
        f"/api/usuarios/agendamentos/{appointment_id}/cancelar", json={"clientId": pedro["id"]}
    )

    assert response.status_code == 403


def test_cancel_unknown_appointment_returns_404(client, maria):
    response = client.put("/api/usuarios/agendamentos/999/cancelar", json={"clientId": maria["id"]})

    assert response.status_code == 404
    assert response.json() == {"erro": "Agendamento não encontrado."}


def test_cancel_requires_client_id(client, book, maria, tomorrow):
    appointment_id = book(maria["id"], tomorrow).json()["agendamento"]["id"]

    response = client.put(f"/api/usuarios/agendamentos/{appointment_id}/cancelar", json={})

    assert response.status_code == 400
    assert response.json() == {"erro": "ID do agendamento e cliente são obrigatórios."}


def test_cancelled_slot_can_be_booked_again(client, book, maria, pedro, tomorrow):
    appointment_id = book(maria["id"], tomorrow, "14:00").json()["agendamento"]["id"]
    client.put(
        f"/api/usuarios/agendamentos/{appointment_id}/cancelar", json={"clientId": maria["id"]}
    )

    assert book(pedro["id"], tomorrow, "14:00").status_code == 201


def test_available_slots_without_bookings(client, tomorrow):
    response = client.get("/api/usuarios/horarios-disponiveis", params={"date": tomorrow.isoformat()})

    assert response.status_code == 200
    assert response.json() == {"horariosDisponiveis": list(DAILY_TIME_SLOTS)}


def test_available_slots_excludes_scheduled(client, book, maria, tomorrow):
    book(maria["id"], tomorrow, "10:00")

    response = client.get("/api/usuarios/horarios-disponiveis", params={"date": tomorrow.isoformat()})

    assert response.json()["horariosDisponiveis"] == [
        "09:00", "11:00", "14:00", "15:00", "16:00", "17:00"
    ]


def test_available_slots_ignores_cancelled(client, book, maria, tomorrow):
    appointment_id = book(maria["id"], tomorrow, "10:00").json()["agendamento"]["id"]
    client.put(
        f"/api/usuarios/agendamentos/{appointment_id}/cancelar", json={"clientId": maria["id"]}
    )

    response = client.get("/api/usuarios/horarios-disponiveis", params={"date": tomorrow.isoformat()})

    assert response.json()["horariosDisponiveis"] == list(DAILY_TIME_SLOTS)


def test_available_slots_excludes_confirmed(client, session, book, maria, tomorrow):
    appointment_id = book(maria["id"], tomorrow, "16:00").json()["agendamento"]["id"]
    AppointmentRepository(session).update_status(appointment_id, AppointmentStatus.confirmed)

    response = client.get("/api/usuarios/horarios-disponiveis", params={"date": tomorrow.isoformat()})

    assert "16:00" not in response.json()["horariosDisponiveis"]


def test_available_slots_requires_date(client):
    response = client.get("/api/usuarios/horarios-disponiveis")

    assert response.status_code == 400
    assert response.json() == {"erro": "Data é obrigatória."}
