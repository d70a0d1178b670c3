from __future__ import annotations


def test_venues_endpoint_returns_all_venues(api_client):
    response = api_client.get("/api/venues")
    assert response.status_code == 200
    data = response.json()
    assert [venue["slug"] for venue in data] == ["pustervik", "nefertiti"]
    assert data[0]["capacity"] == 650
    assert data[0]["address"] == "Järntorgsgatan 12"


def test_venues_endpoint_ignores_query_parameters(memory_api_client):
    response = memory_api_client.get("/api/venues", params={"month": "abc"})
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_genres_endpoint(api_client):
    response = api_client.get("/api/genres")
    assert response.status_code == 200
    assert [genre["slug"] for genre in response.json()] == ["rock", "jazz", "indie"]


def test_health(memory_api_client):
    response = memory_api_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
