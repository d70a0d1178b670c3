from __future__ import annotations

import pytest


def _slugs(response):
    return [item["slug"] for item in response.json()]


def test_events_endpoint_returns_full_list(api_client):
    response = api_client.get("/api/events")
    assert response.status_code == 200
    data = response.json()
    assert [item["slug"] for item in data] == ["rock-night", "jazz-evening"]
    first = data[0]
    assert {"title", "start_time", "end_time", "status", "venue", "artists", "genres"}.issubset(first.keys())
    assert first["venue"]["slug"] == "pustervik"
    assert first["venue"]["coordinates"] == {"lat": 57.69968, "lng": 11.95311}
    assert [artist["slug"] for artist in first["artists"]] == ["slussen-syndikat", "nattfjaril"]
    assert first["genres"] == [{"id": first["genre_ids"][0], "name": "Rock", "slug": "rock", "color": "#e4572e"}]


def test_event_times_rendered_in_reference_timezone(api_client):
    first = api_client.get("/api/events").json()[0]
    assert first["start_time"] == "2025-11-05T20:00:00+01:00"
    assert first["end_time"] == "2025-11-05T23:00:00+01:00"


def test_event_status_uses_clock(api_client):
    data = {item["slug"]: item for item in api_client.get("/api/events").json()}
    assert data["rock-night"]["status"] == "ongoing"
    assert data["jazz-evening"]["status"] == "upcoming"


@pytest.mark.parametrize(
    "params, expected",
    [
        ({"month": "2025-11"}, ["rock-night"]),
        ({"genres": "jazz"}, ["jazz-evening"]),
        ({"month": "2025-11", "genres": "jazz"}, []),
        ({"venues": "pustervik,nefertiti"}, ["rock-night", "jazz-evening"]),
        ({"venues": "nefertiti", "genres": "rock,jazz"}, ["jazz-evening"]),
        ({"genres": ""}, ["rock-night", "jazz-evening"]),
        ({"search": "timmen"}, ["jazz-evening"]),
        ({"from": "2025-11-06"}, ["jazz-evening"]),
        ({"to": "2025-11-05"}, ["rock-night"]),
    ],
)
def test_events_endpoint_filters(memory_api_client, params, expected):
    response = memory_api_client.get("/api/events", params=params)
    assert response.status_code == 200
    assert _slugs(response) == expected


@pytest.mark.parametrize("month", ["2025-13", "abc", "2025-00"])
def test_events_endpoint_rejects_malformed_month(memory_api_client, month):
    response = memory_api_client.get("/api/events", params={"month": month})
    assert response.status_code == 400
    body = response.json()
    assert body["status_code"] == 400
    assert "YYYY-MM" in body["error"]


def test_events_endpoint_rejects_inverted_range(memory_api_client):
    response = memory_api_client.get("/api/events", params={"from": "2025-12-02", "to": "2025-12-01"})
    assert response.status_code == 400


def test_event_detail_by_slug(api_client):
    response = api_client.get("/api/events/jazz-evening")
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Jazz Evening"
    assert body["venue"]["name"] == "Nefertiti"
    assert body["venue"]["coordinates"] is None
    assert [artist["name"] for artist in body["artists"]] == ["Blå Timmen Kvartett"]


def test_event_detail_not_found(api_client):
    response = api_client.get("/api/events/no-such-gig")
    assert response.status_code == 404
    assert response.json()["status_code"] == 404
