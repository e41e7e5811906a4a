from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any, Iterator, Optional, Sequence

from price_guesser.catalog.markets import MarketConfig, get_country_config
from price_guesser.catalog.product import Product, parse_playable_products
from price_guesser.catalog.search_client import SEARCH_TERMS, SearchError, SearchFn, search_catalog
from price_guesser.daily.sampler import SeededRandom, shuffle_with_seed
from price_guesser.daily.seed import date_seed
from price_guesser.scoring.engine import ROUNDS_PER_DAY

logger = logging.getLogger(__name__)


class InsufficientProductsError(Exception):
    def __init__(self, found: int, required: int):
        super().__init__(f"Only {found} found, need {required} products")
        self.found = found
        self.required = required


def _candidates_for_term(search: SearchFn, term: str, market: MarketConfig) -> list[Product]:
    try:
        payload = search(term, market.country, market.language)
    except SearchError as exc:
        logger.warning("search failed for term %r (%s/%s): %s", term, market.country, market.language, exc)
        return []
    return parse_playable_products(payload)


def _iter_term_candidates(
    search: SearchFn, terms: Sequence[str], market: MarketConfig
) -> Iterator[tuple[str, list[Product]]]:
    for term in terms:
        yield term, _candidates_for_term(search, term, market)


def select_products(
    seed: int,
    market: MarketConfig,
    search: SearchFn,
    terms: Sequence[str] = SEARCH_TERMS,
    count: int = ROUNDS_PER_DAY,
) -> list[Product]:
    shuffled_terms = shuffle_with_seed(terms, SeededRandom(seed))

    selected: list[Product] = []
    used_ids: set[str] = set()

    for term, candidates in _iter_term_candidates(search, shuffled_terms, market):
        valid = [p for p in candidates if p.id not in used_ids]
        if valid:
            # sub-seed follows how many products were accepted so far, not the term position
            picked = shuffle_with_seed(valid, SeededRandom(seed + len(selected)))[0]
            selected.append(picked.with_currency(market.currency))
            used_ids.add(picked.id)
            logger.info("picked %s (%s) from term %r", picked.id, picked.name, term)
        if len(selected) >= count:
            break

    if len(selected) < count:
        raise InsufficientProductsError(len(selected), count)
    return selected


def resolve_daily_products(
    country: Optional[str] = None,
    day: Optional[date] = None,
    search: Optional[SearchFn] = None,
    terms: Sequence[str] = SEARCH_TERMS,
) -> list[Product]:
    market = get_country_config(country)
    seed = date_seed(day)
    logger.info("resolving daily products: country=%s seed=%d", market.country, seed)
    return select_products(seed, market, search or search_catalog, terms=terms)


def resolve_random_product(
    country: Optional[str] = None,
    search: Optional[SearchFn] = None,
    rng: Any = random,
    terms: Sequence[str] = SEARCH_TERMS,
) -> Product:
    market = get_country_config(country)
    term = rng.choice(list(terms))
    candidates = _candidates_for_term(search or search_catalog, term, market)
    if not candidates:
        raise InsufficientProductsError(0, 1)
    return rng.choice(candidates).with_currency(market.currency)
