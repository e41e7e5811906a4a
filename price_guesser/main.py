from __future__ import annotations

import logging
import random
from datetime import date
from typing import Optional

from fastapi import FastAPI, Header, Query
from fastapi.responses import JSONResponse, Response

from price_guesser.api.schemas import (
    DailyProductsResponse,
    ErrorResponse,
    Price,
    ProductOut,
    Progress,
    ScoreRequest,
    ScoreResponse,
    ShareRequest,
    ShareResponse,
)
from price_guesser.catalog.markets import detect_country, format_price, get_country_config
from price_guesser.catalog.product import Product
from price_guesser.catalog.search_client import SEARCH_TERMS, SearchError, search_catalog
from price_guesser.daily.resolver import InsufficientProductsError, resolve_daily_products, resolve_random_product
from price_guesser.daily.seed import today_key
from price_guesser.db.migrate import run_migrations
from price_guesser.db.repository import ProgressRecord, load_progress, save_progress
from price_guesser.log_setup import setup_logging
from price_guesser.scoring.engine import evaluate_guess, share_text, starting_guess, total_score

logger = logging.getLogger(__name__)

app = FastAPI(title="Daily Price Guesser API", version="0.1.0")

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
SEARCH_CACHE_HEADERS = {**CORS_HEADERS, "Cache-Control": "public, max-age=300"}


@app.on_event("startup")
def startup() -> None:
    setup_logging()
    run_migrations()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


def _market_code(country: Optional[str], accept_language: Optional[str]) -> str:
    if country:
        return get_country_config(country).country
    return detect_country(accept_language)


def _product_out(product: Product, locale: str) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        type_name=product.type_name,
        main_image_url=product.main_image_url,
        main_image_alt=product.main_image_alt,
        contextual_image_url=product.contextual_image_url,
        price=Price(
            current_price=product.price.current_price,
            currency=product.price.currency,
            is_range=product.price.is_range,
            formatted=format_price(product.price.current_price, product.price.currency, locale),
        ),
        rating_value=product.rating_value,
        rating_count=product.rating_count,
        pip_url=product.pip_url,
        starting_guess=starting_guess(product.price.current_price),
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/search")
def proxy_search(
    q: Optional[str] = Query(default=None),
    country: str = Query(default="us"),
    language: str = Query(default="en"),
) -> Response:
    term = q or random.choice(SEARCH_TERMS)
    country = country or "us"
    language = language or "en"
    try:
        payload = search_catalog(term, country, language)
    except SearchError as exc:
        if exc.status is not None:
            logger.warning("catalog returned %d for term %r", exc.status, term)
            return _error("Failed to fetch from catalog", exc.status)
        logger.error("catalog search failed for term %r: %s", term, exc)
        return _error("Internal server error", 500)
    return JSONResponse(payload, headers=SEARCH_CACHE_HEADERS)


@app.options("/api/search")
def proxy_search_options() -> Response:
    return Response(
        headers={
            **CORS_HEADERS,
            "Access-Control-Allow-Methods": "GET, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }
    )


@app.get(
    "/daily",
    response_model=DailyProductsResponse,
    responses={503: {"model": ErrorResponse}},
)
def get_daily_products(
    country: Optional[str] = Query(default=None),
    day: Optional[date] = Query(default=None),
    accept_language: Optional[str] = Header(default=None),
):
    market = get_country_config(_market_code(country, accept_language))
    day = day or date.today()
    try:
        products = resolve_daily_products(market.country, day=day, search=search_catalog)
    except InsufficientProductsError as exc:
        logger.error("daily set unavailable for %s on %s: %s", market.country, today_key(day), exc)
        return _error(str(exc), 503)
    return DailyProductsResponse(
        date=today_key(day),
        country=market.country,
        items=[_product_out(p, market.locale) for p in products],
    )


@app.get("/random", response_model=ProductOut, responses={503: {"model": ErrorResponse}})
def get_random_product(
    country: Optional[str] = Query(default=None),
    accept_language: Optional[str] = Header(default=None),
):
    market = get_country_config(_market_code(country, accept_language))
    try:
        product = resolve_random_product(market.country, search=search_catalog)
    except InsufficientProductsError as exc:
        return _error(str(exc), 503)
    return _product_out(product, market.locale)


@app.post("/score", response_model=ScoreResponse)
def score_guess(body: ScoreRequest) -> ScoreResponse:
    result = evaluate_guess(body.guess, body.actual)
    return ScoreResponse(
        guess=result.guess,
        actual=result.actual,
        accuracy=result.accuracy,
        message=result.message,
        emoji=result.emoji,
    )


@app.get("/progress/{player_id}", response_model=Progress, responses={404: {"model": ErrorResponse}})
def get_progress(player_id: str):
    record = load_progress(player_id, today_key())
    if record is None:
        return _error("No progress for today", 404)
    return Progress(
        date=record.date,
        current_round=record.current_round,
        scores=record.scores,
        completed=record.completed,
    )


@app.put("/progress/{player_id}", response_model=Progress)
def put_progress(player_id: str, body: Progress) -> Progress:
    save_progress(
        player_id,
        ProgressRecord(
            date=body.date,
            current_round=body.current_round,
            scores=list(body.scores),
            completed=body.completed,
        ),
    )
    return body


@app.post("/share", response_model=ShareResponse)
def share(body: ShareRequest) -> ShareResponse:
    day_key = body.date or today_key()
    return ShareResponse(
        text=share_text(body.scores, day_key, body.origin),
        total_score=total_score(body.scores),
    )
