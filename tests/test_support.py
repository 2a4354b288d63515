import random
import re

from gamestore.services.support_service import ticket_protocol


def test_open_ticket(client):
    resp = client.post(
        "/api/support/ticket",
        json={"name": "Ana", "email": "ana@example.com", "subject": "Key", "message": "My key does not work"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert re.fullmatch(r"#2\d{4}", body["protocol"])


def test_ticket_requires_name_email_and_message(client):
    missing_message = client.post("/api/support/ticket", json={"name": "Ana", "email": "ana@example.com"})
    bad_email = client.post("/api/support/ticket", json={"name": "Ana", "email": "ana", "message": "hi"})
    blank_name = client.post("/api/support/ticket", json={"name": " ", "email": "ana@example.com", "message": "hi"})

    assert missing_message.status_code == 400
    assert bad_email.status_code == 400
    assert blank_name.status_code == 400


def test_ticket_protocol_pads_digits():
    class Fixed(random.Random):
        def randint(self, a, b):
            return 7

    assert ticket_protocol(Fixed()) == "#20007"
