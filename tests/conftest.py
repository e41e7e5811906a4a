from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from price_guesser.db import connection


@pytest.fixture()
def temp_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    db_path = tmp_path / "app.db"
    monkeypatch.setattr(connection, "DB_PATH", db_path)
    return db_path


def make_item(
    product_id: str,
    whole: str = "49",
    decimals: Any = "99",
    *,
    image: Any = "https://img.example/p.jpg",
    is_range: bool = False,
    currency: str = "USD",
    name: str = "LACK",
) -> dict[str, Any]:
    current: dict[str, Any] = {"prefix": "$", "wholeNumber": whole, "separator": "."}
    if decimals is not None:
        current["decimals"] = decimals
    return {
        "product": {
            "id": product_id,
            "name": name,
            "typeName": "Side table",
            "mainImageUrl": image,
            "mainImageAlt": f"{name} side table",
            "salesPrice": {"current": current, "currency": currency, "isRange": is_range},
            "ratingValue": 4.6,
            "ratingCount": 812,
            "pipUrl": f"/p/{name.lower()}-{product_id}/",
        }
    }


def make_payload(items: list[dict[str, Any]]) -> dict[str, Any]:
    return {"searchResultPage": {"products": {"main": {"items": items}}}}
