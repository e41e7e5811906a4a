from __future__ import annotations

import json
import logging
import os
from http.client import HTTPException
from typing import Any, Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://sik.search.blue.cdtapps.com"
DEFAULT_TIMEOUT_SECONDS = 20
DEFAULT_RESULT_SIZE = 50

SEARCH_BASE_URL = os.getenv("SEARCH_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
SEARCH_TIMEOUT_SECONDS = float(os.getenv("SEARCH_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)))

SEARCH_TERMS: tuple[str, ...] = (
    "lamp", "chair", "table", "shelf", "sofa", "bed", "desk", "mirror",
    "rug", "curtain", "plant", "vase", "clock", "frame", "basket",
    "storage", "box", "hook", "candle", "cushion", "blanket", "towel",
    "pan", "pot", "plate", "bowl", "glass", "mug", "knife", "cutting",
    "trash", "bin", "organizer", "drawer", "rack", "stand", "stool",
    "bookcase", "wardrobe", "dresser", "nightstand", "cabinet", "trolley",
    "outdoor", "garden", "kids", "baby", "toy", "game", "office", "bathroom",
)

SearchFn = Callable[[str, str, str], Any]


class SearchError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def build_search_url(term: str, country: str, language: str, size: int = DEFAULT_RESULT_SIZE) -> str:
    query = urlencode(
        {
            "q": term,
            "size": size,
            "types": "PRODUCT",
            "autocorrect": "true",
            "subcategories-style": "tree-navigation",
            "c": "sr",
            "v": "20210322",
        },
        quote_via=quote,
    )
    return f"{SEARCH_BASE_URL}/{quote(country)}/{quote(language)}/search-result-page?{query}"


def _fetch_json(url: str) -> Any:
    req = Request(
        url,
        headers={
            "Accept": "application/json",
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        },
    )
    with urlopen(req, timeout=SEARCH_TIMEOUT_SECONDS) as resp:
        body = resp.read().decode("utf-8", errors="ignore")
    return json.loads(body)


def search_catalog(term: str, country: str = "us", language: str = "en") -> Any:
    url = build_search_url(term, country, language)
    try:
        payload = _fetch_json(url)
    except HTTPError as exc:
        raise SearchError(f"catalog search returned HTTP {exc.code}", status=exc.code) from exc
    except (URLError, HTTPException, OSError) as exc:
        raise SearchError(f"catalog search failed: {exc}") from exc
    except ValueError as exc:
        raise SearchError(f"catalog search returned malformed JSON: {exc}") from exc
    logger.debug("catalog search ok: term=%s country=%s language=%s", term, country, language)
    return payload
