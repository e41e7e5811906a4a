from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Optional

MIN_PRICE = 1.0
MAX_PRICE = 2000.0

_NON_DIGIT_RE = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class ProductPrice:
    current_price: float
    currency: str
    is_range: bool = False


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    type_name: str
    main_image_url: str
    price: ProductPrice
    pip_url: str
    main_image_alt: Optional[str] = None
    contextual_image_url: Optional[str] = None
    rating_value: Optional[float] = None
    rating_count: Optional[int] = None

    def with_currency(self, currency: str) -> Product:
        return replace(self, price=replace(self.price, currency=currency))


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_str(value: Any) -> Optional[str]:
    text = _as_str(value)
    return text or None


def _optional_number(value: Any, kind: type) -> Optional[Any]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return kind(value)
    except (TypeError, ValueError):
        return None


def parse_price(current: Any) -> Optional[float]:
    """Combine the catalog's split price encoding into a single amount.

    The whole-number part may carry grouping characters ("1,299"), which are
    stripped; missing decimals default to "00".
    """
    current = _as_dict(current)
    whole_raw = _as_str(current.get("wholeNumber"))
    if not whole_raw:
        return None
    whole = _NON_DIGIT_RE.sub("", whole_raw)
    if not whole:
        return None
    decimals = _NON_DIGIT_RE.sub("", _as_str(current.get("decimals"))) or "00"
    try:
        value = float(f"{whole}.{decimals}")
    except ValueError:
        return None
    if value <= 0:
        return None
    return value


def parse_product(item: Any) -> Optional[Product]:
    product = _as_dict(_as_dict(item).get("product"))
    if not product:
        return None

    product_id = _as_str(product.get("id"))
    image_url = _as_str(product.get("mainImageUrl"))
    sales_price = _as_dict(product.get("salesPrice"))
    price_value = parse_price(sales_price.get("current"))

    if not product_id or not image_url or price_value is None:
        return None

    return Product(
        id=product_id,
        name=_as_str(product.get("name")),
        type_name=_as_str(product.get("typeName")),
        main_image_url=image_url,
        main_image_alt=_optional_str(product.get("mainImageAlt")),
        contextual_image_url=_optional_str(product.get("contextualImageUrl")),
        price=ProductPrice(
            current_price=price_value,
            currency=_as_str(sales_price.get("currency")) or "USD",
            is_range=bool(sales_price.get("isRange") or False),
        ),
        rating_value=_optional_number(product.get("ratingValue"), float),
        rating_count=_optional_number(product.get("ratingCount"), int),
        pip_url=_as_str(product.get("pipUrl")),
    )


def extract_items(payload: Any) -> list[Any]:
    page = _as_dict(_as_dict(payload).get("searchResultPage"))
    main = _as_dict(_as_dict(page.get("products")).get("main"))
    items = main.get("items")
    return items if isinstance(items, list) else []


def is_playable(product: Product) -> bool:
    price = product.price
    return MIN_PRICE <= price.current_price <= MAX_PRICE and not price.is_range


def parse_playable_products(payload: Any) -> list[Product]:
    products: list[Product] = []
    for item in extract_items(payload):
        product = parse_product(item)
        if product is None or not is_playable(product):
            continue
        products.append(product)
    return products
