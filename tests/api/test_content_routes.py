import uuid

import pytest


@pytest.fixture
def articles(make_entry):
    english = make_entry(title="Welcome", slug="welcome", locale="en")
    german = make_entry(
        title="Willkommen", slug="welcome", locale="de", document_id=english.document_id
    )
    make_entry(title="Only English", slug="news", locale="en")
    return english, german


def test_list_entries_in_requested_locale(client, articles):
    response = client.get("/api/content/article", params={"locale": "DE"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert [e["title"] for e in body["data"]] == ["Willkommen"]
    assert response.headers["content-language"] == "de"


def test_list_entries_defaults_to_default_locale(client, articles):
    body = client.get("/api/content/article", params={"sort": "title:asc"}).json()

    assert [e["title"] for e in body["data"]] == ["Only English", "Welcome"]


def test_list_entries_all_locales(client, articles):
    body = client.get("/api/content/article", params={"locale": "all"}).json()

    assert body["count"] == 3
    assert {e["locale"] for e in body["data"]} == {"en", "de"}


def test_list_entries_unknown_locale_is_empty(client, articles):
    response = client.get("/api/content/article", params={"locale": "fr"})

    assert response.status_code == 200
    assert response.json() == {"data": [], "count": 0}


def test_list_entries_by_slug(client, articles):
    body = client.get(
        "/api/content/article", params={"locale": "all", "slug": "welcome"}
    ).json()

    assert body["count"] == 2


def test_list_entries_invalid_sort(client, articles):
    response = client.get("/api/content/article", params={"sort": "data:asc"})

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_localized_entries_fall_back(client, articles):
    body = client.get(
        "/api/content/article/localized", params={"locale": "de-AT", "slug": "news"}
    ).json()

    assert body["locale"] == "en"
    assert body["fallback"] is True
    assert [e["title"] for e in body["data"]] == ["Only English"]


def test_localized_entries_in_regional_locale(client, articles):
    body = client.get(
        "/api/content/article/localized", params={"locale": "de-CH", "slug": "welcome"}
    ).json()

    assert body["locale"] == "de"
    assert body["fallback"] is False
    assert [e["title"] for e in body["data"]] == ["Willkommen"]


def test_read_entry(client, articles):
    english, _ = articles

    response = client.get(f"/api/content/article/{english.id}")

    assert response.status_code == 200
    assert response.json()["document_id"] == str(english.document_id)


def test_read_missing_entry_translates_error(client):
    entry_id = uuid.uuid4()

    response = client.get(f"/api/content/article/{entry_id}", params={"locale": "de-AT"})

    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "CONTENT_ENTRY_NOT_FOUND"
    assert body["message"] == f"Content entry nicht gefunden: {entry_id}"
    assert body["message_key"] == "error_not_found_with_id"
    assert response.headers["content-language"] == "de"


def test_create_entry_resolves_locale(client):
    response = client.post(
        "/api/content/event",
        json={"title": "Spring cup", "locale": "de-at", "data": {"venue": "Wien"}},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["locale"] == "de-AT"
    assert body["content_type"] == "event"
    assert body["data"] == {"venue": "Wien"}


def test_create_entry_without_locale_uses_default(client):
    response = client.post("/api/content/event", json={"title": "Spring cup"})

    assert response.status_code == 201
    assert response.json()["locale"] == "en"


def test_create_entry_unsupported_locale(client):
    response = client.post(
        "/api/content/event", json={"title": "Coupe", "locale": "fr"}
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "UNSUPPORTED_LOCALE"
    assert body["message"] == "Unsupported locale: fr"


def test_invalid_content_type(client):
    assert client.get("/api/content/Not_Valid").status_code == 422


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "content-language" not in response.headers


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["x-request-id"] == "req-123"
