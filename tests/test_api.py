from fastapi.testclient import TestClient
from sqlalchemy import text


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert isinstance(body["ts"], int)


def test_counter_preview_and_next(client):
    assert client.get("/counter/preview").json() == {"last": 0, "next": 1, "rxNo": "000001"}

    first = client.post("/counter/next")
    second = client.post("/counter/next")

    assert first.status_code == 200
    assert first.json() == {"consumed": 1, "rxNo": "000001"}
    assert second.json() == {"consumed": 2, "rxNo": "000002"}
    assert client.get("/counter/preview").json()["next"] == 3


def test_create_prescription_from_counter(client, set_counter):
    set_counter(5)

    response = client.post("/prescriptions", json={"paciente": "Ana"})

    assert response.status_code == 201
    body = response.json()
    assert body["rxNo"] == "000006"
    assert body["paciente"] == "Ana"
    assert body["idade"] == ""
    assert body["createdAt"] == body["updatedAt"]
    assert set(body) == {
        "id", "rxNo", "paciente", "endereco", "idade", "data",
        "diag", "presc", "createdAt", "updatedAt",
    }


def test_create_with_explicit_rx_no_keeps_counter(client):
    response = client.post("/prescriptions", json={"rxNo": "RX-9", "paciente": "Bia"})

    assert response.status_code == 201
    assert response.json()["rxNo"] == "RX-9"
    assert client.get("/counter/preview").json()["last"] == 0


def test_create_coerces_numbers_and_nulls(client):
    response = client.post(
        "/prescriptions", json={"paciente": "Caio", "idade": 42, "diag": None}
    )

    assert response.status_code == 201
    assert response.json()["idade"] == "42"
    assert response.json()["diag"] == ""


def test_create_without_body_uses_defaults(client):
    response = client.post("/prescriptions")

    assert response.status_code == 201
    assert response.json()["rxNo"] == "000001"
    assert response.json()["paciente"] == ""


def test_create_rejects_invalid_field_type(client):
    response = client.post("/prescriptions", json={"paciente": ["Ana"]})

    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_duplicate_explicit_rx_no_conflict(client):
    client.post("/prescriptions", json={"rxNo": "000042"})

    response = client.post("/prescriptions", json={"rxNo": "000042", "paciente": "Bia"})

    assert response.status_code == 409
    assert response.json()["error"] == "rx_no_conflict"
    assert client.get("/counter/preview").json()["last"] == 0


def test_auto_create_after_explicit_next_number(client):
    client.post("/prescriptions", json={"rxNo": "000001"})

    responses = [
        client.post("/prescriptions", json={"paciente": name}) for name in ("Ana", "Bia")
    ]

    assert [r.status_code for r in responses] == [201, 201]
    assert [r.json()["rxNo"] for r in responses] == ["000002", "000003"]
    assert client.get("/counter/preview").json()["last"] == 3


def test_get_round_trip(client):
    created = client.post("/prescriptions", json={"paciente": "Ana", "presc": "Dipirona"}).json()

    response = client.get(f"/prescriptions/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_returns_404(client):
    response = client.get("/prescriptions/999")

    assert response.status_code == 404
    assert response.json() == {"error": "not_found"}


def test_list_and_search(client):
    client.post("/prescriptions", json={"paciente": "Ana Silva"})
    client.post("/prescriptions", json={"paciente": "Bruno", "diag": "Rinite"})

    everything = client.get("/prescriptions").json()
    found = client.get("/prescriptions", params={"q": "ana"}).json()

    assert sorted(p["rxNo"] for p in everything) == ["000001", "000002"]
    assert [p["paciente"] for p in found] == ["Ana Silva"]
    assert client.get("/prescriptions").json() == everything


def test_update_full_replace(client):
    created = client.post(
        "/prescriptions", json={"paciente": "Ana", "endereco": "Rua C", "diag": "Asma"}
    ).json()

    response = client.put(
        f"/prescriptions/{created['id']}",
        json={"paciente": "Ana Lima", "rxNo": "999999"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["paciente"] == "Ana Lima"
    assert body["endereco"] == ""
    assert body["diag"] == ""
    assert body["rxNo"] == created["rxNo"]
    assert body["createdAt"] == created["createdAt"]
    assert body["updatedAt"] >= body["createdAt"]


def test_update_missing_returns_404(client):
    response = client.put("/prescriptions/999", json={"paciente": "X"})

    assert response.status_code == 404
    assert response.json() == {"error": "not_found"}


def test_delete(client):
    created = client.post("/prescriptions", json={"paciente": "Ana"}).json()

    response = client.delete(f"/prescriptions/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert client.get(f"/prescriptions/{created['id']}").status_code == 404


def test_delete_missing_returns_404(client):
    response = client.delete("/prescriptions/999")

    assert response.status_code == 404
    assert response.json() == {"error": "not_found"}


def test_store_failure_returns_500(client, app):
    with app.state.engine.begin() as connection:
        connection.execute(text("DROP TABLE prescriptions"))

    response = client.get("/prescriptions")

    assert response.status_code == 500
    assert "prescriptions" in response.json()["error"]


def test_security_headers(client):
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "Strict-Transport-Security" in response.headers


def test_rate_limit(make_app):
    app = make_app(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=2)

    with TestClient(app) as client:
        assert client.get("/counter/preview").status_code == 200
        assert client.get("/counter/preview").status_code == 200
        blocked = client.get("/counter/preview")
        assert client.get("/health").status_code == 200

    assert blocked.status_code == 429
    assert blocked.json() == {"error": "rate_limited"}
    assert int(blocked.headers["Retry-After"]) >= 1


def test_body_too_large(make_app):
    app = make_app(MAX_BODY_BYTES=64)

    with TestClient(app) as client:
        response = client.post("/prescriptions", json={"presc": "x" * 200})

    assert response.status_code == 413
    assert response.json() == {"error": "payload_too_large"}


def test_chunked_body_too_large(make_app):
    app = make_app(MAX_BODY_BYTES=64)

    def chunks():
        yield b'{"presc": "'
        for _ in range(10):
            yield b"x" * 20
        yield b'"}'

    with TestClient(app) as client:
        response = client.post(
            "/prescriptions",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 413
    assert response.json() == {"error": "payload_too_large"}


def test_chunked_body_within_limit_reaches_route(make_app):
    app = make_app(MAX_BODY_BYTES=1024)

    def chunks():
        yield b'{"paciente": '
        yield b'"Ana"}'

    with TestClient(app) as client:
        response = client.post(
            "/prescriptions",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 201
    assert response.json()["paciente"] == "Ana"


def test_non_numeric_id_returns_404(client):
    assert client.get("/prescriptions/abc").status_code == 404
    assert client.put("/prescriptions/1_0", json={"paciente": "X"}).status_code == 404
    response = client.delete("/prescriptions/-1")

    assert response.status_code == 404
    assert response.json() == {"error": "not_found"}
