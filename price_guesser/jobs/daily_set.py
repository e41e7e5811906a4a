from __future__ import annotations

import argparse
import logging
from datetime import date
from typing import Optional, Sequence

from price_guesser.catalog.markets import format_price, get_country_config
from price_guesser.daily.resolver import InsufficientProductsError, resolve_daily_products
from price_guesser.daily.seed import date_seed, today_key
from price_guesser.log_setup import setup_logging

logger = logging.getLogger(__name__)


def run_job(country: str, day: date) -> int:
    market = get_country_config(country)
    logger.info("daily set for %s, country=%s, seed=%d", today_key(day), market.country, date_seed(day))
    try:
        products = resolve_daily_products(market.country, day=day)
    except InsufficientProductsError as exc:
        logger.error("could not build daily set: %s", exc)
        return 1

    for idx, product in enumerate(products, start=1):
        price = format_price(product.price.current_price, product.price.currency, market.locale)
        print(f"{idx}. {product.name} ({product.type_name}) {price} [{product.id}]")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Resolve the daily product set for a market.")
    parser.add_argument("--country", default="us")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD, defaults to today")
    args = parser.parse_args(argv)

    setup_logging()
    return run_job(args.country, args.date or date.today())


if __name__ == "__main__":
    raise SystemExit(main())
