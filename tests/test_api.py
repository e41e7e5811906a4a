from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from conftest import make_item, make_payload
from fastapi.testclient import TestClient

from price_guesser import main
from price_guesser.catalog.search_client import SEARCH_TERMS, SearchError
from price_guesser.daily.seed import today_key


@pytest.fixture()
def client(temp_db: Path):
    with TestClient(main.app) as test_client:
        yield test_client


def _per_term_search(calls: list[tuple[str, str, str]]):
    def fake_search(term: str, country: str, language: str) -> dict[str, Any]:
        calls.append((term, country, language))
        return make_payload([make_item(f"id-{term}", "49", "99", name=term.upper())])

    return fake_search


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_proxy_forwards_payload_with_cache_headers(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str, str]] = []
    monkeypatch.setattr(main, "search_catalog", _per_term_search(calls))

    resp = client.get("/api/search", params={"q": "lamp", "country": "se", "language": "sv"})

    assert resp.status_code == 200
    assert resp.json() == make_payload([make_item("id-lamp", "49", "99", name="LAMP")])
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["cache-control"] == "public, max-age=300"
    assert calls == [("lamp", "se", "sv")]


def test_proxy_defaults(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str, str]] = []
    monkeypatch.setattr(main, "search_catalog", _per_term_search(calls))

    assert client.get("/api/search").status_code == 200
    term, country, language = calls[0]
    assert term in SEARCH_TERMS
    assert (country, language) == ("us", "en")


def test_proxy_mirrors_backend_status(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing(term: str, country: str, language: str) -> Any:
        raise SearchError("HTTP 404", status=404)

    monkeypatch.setattr(main, "search_catalog", failing)
    resp = client.get("/api/search", params={"q": "lamp"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Failed to fetch from catalog"}
    assert resp.headers["access-control-allow-origin"] == "*"


def test_proxy_wraps_transport_failures(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing(term: str, country: str, language: str) -> Any:
        raise SearchError("connection refused")

    monkeypatch.setattr(main, "search_catalog", failing)
    resp = client.get("/api/search", params={"q": "lamp"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_proxy_preflight(client: TestClient) -> None:
    resp = client.options("/api/search")
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-methods"] == "GET, OPTIONS"
    assert resp.headers["access-control-allow-headers"] == "Content-Type"


def test_daily_products(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str, str]] = []
    monkeypatch.setattr(main, "search_catalog", _per_term_search(calls))

    resp = client.get("/daily", params={"day": "2024-03-15"}, headers={"Accept-Language": "en-GB,en;q=0.8"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["date"] == "2024-03-15"
    assert body["country"] == "gb"
    assert len(body["items"]) == 5
    assert len({item["id"] for item in body["items"]}) == 5
    first = body["items"][0]
    assert first["price"] == {"current_price": 49.99, "currency": "GBP", "is_range": False, "formatted": "£49.99"}
    assert first["starting_guess"] == 75


def test_daily_products_is_stable_for_a_day(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "search_catalog", _per_term_search([]))
    first = client.get("/daily", params={"day": "2024-03-15", "country": "us"}).json()
    second = client.get("/daily", params={"day": "2024-03-15", "country": "us"}).json()
    assert [i["id"] for i in first["items"]] == [i["id"] for i in second["items"]]


def test_daily_products_unavailable(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "search_catalog", lambda term, country, language: make_payload([]))
    resp = client.get("/daily", params={"country": "us"})
    assert resp.status_code == 503
    assert "0 found, need 5" in resp.json()["error"]


def test_random_product(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "search_catalog", _per_term_search([]))
    resp = client.get("/random", params={"country": "jp"})
    assert resp.status_code == 200
    assert resp.json()["price"]["currency"] == "JPY"
    assert resp.json()["price"]["formatted"] == "￥50"


def test_score(client: TestClient) -> None:
    resp = client.post("/score", json={"guess": 50, "actual": 49.99})
    assert resp.status_code == 200
    body = resp.json()
    assert body["accuracy"] == pytest.approx(99.98, abs=0.01)
    assert (body["message"], body["emoji"]) == ("Perfect!", "🎯")


def test_score_rejects_non_positive_actual(client: TestClient) -> None:
    assert client.post("/score", json={"guess": 50, "actual": 0}).status_code == 422


def test_progress_round_trip(client: TestClient) -> None:
    assert client.get("/progress/p1").status_code == 404

    record = {"date": today_key(), "current_round": 1, "scores": [87.5], "completed": False}
    assert client.put("/progress/p1", json=record).status_code == 200
    assert client.get("/progress/p1").json() == record


def test_stale_progress_is_not_returned(client: TestClient) -> None:
    record = {"date": "2000-01-01", "current_round": 5, "scores": [1, 2, 3, 4, 5], "completed": True}
    client.put("/progress/p1", json=record)
    assert client.get("/progress/p1").status_code == 404


def test_share(client: TestClient) -> None:
    resp = client.post("/share", json={"scores": [100, 50], "origin": "https://guess.example", "date": "2024-03-15"})
    assert resp.status_code == 200
    assert resp.json() == {
        "text": "Price Guesser 2024-03-15\n🎯 👍\nScore: 150/500\n\nPlay at: https://guess.example",
        "total_score": 150,
    }


def test_proxy_empty_params_take_defaults(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str, str]] = []
    monkeypatch.setattr(main, "search_catalog", _per_term_search(calls))

    assert client.get("/api/search", params={"q": "", "country": "", "language": ""}).status_code == 200
    term, country, language = calls[0]
    assert term in SEARCH_TERMS
    assert (country, language) == ("us", "en")
