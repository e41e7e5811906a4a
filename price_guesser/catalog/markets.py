from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_COUNTRY = "us"


@dataclass(frozen=True)
class MarketConfig:
    country: str
    language: str
    currency: str
    locale: str


COUNTRY_CONFIG: dict[str, MarketConfig] = {
    "us": MarketConfig("us", "en", "USD", "en-US"),
    "gb": MarketConfig("gb", "en", "GBP", "en-GB"),
    "de": MarketConfig("de", "de", "EUR", "de-DE"),
    "fr": MarketConfig("fr", "fr", "EUR", "fr-FR"),
    "es": MarketConfig("es", "es", "EUR", "es-ES"),
    "it": MarketConfig("it", "it", "EUR", "it-IT"),
    "nl": MarketConfig("nl", "nl", "EUR", "nl-NL"),
    "se": MarketConfig("se", "sv", "SEK", "sv-SE"),
    "no": MarketConfig("no", "no", "NOK", "nb-NO"),
    "dk": MarketConfig("dk", "da", "DKK", "da-DK"),
    "fi": MarketConfig("fi", "fi", "EUR", "fi-FI"),
    "pl": MarketConfig("pl", "pl", "PLN", "pl-PL"),
    "au": MarketConfig("au", "en", "AUD", "en-AU"),
    "ca": MarketConfig("ca", "en", "CAD", "en-CA"),
    "jp": MarketConfig("jp", "ja", "JPY", "ja-JP"),
    "at": MarketConfig("at", "de", "EUR", "de-AT"),
    "ch": MarketConfig("ch", "de", "CHF", "de-CH"),
    "be": MarketConfig("be", "fr", "EUR", "fr-BE"),
    "ie": MarketConfig("ie", "en", "EUR", "en-IE"),
    "pt": MarketConfig("pt", "pt", "EUR", "pt-PT"),
}

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr.",
    "PLN": "zł",
    "AUD": "$",
    "CAD": "$",
    "JPY": "￥",
    "CHF": "CHF",
}

_ZERO_DECIMAL_CURRENCIES = {"JPY"}

PREFIX = "prefix"
PREFIX_SPACED = "prefix_spaced"
SUFFIX = "suffix"

# (decimal separator, grouping separator, symbol placement)
_LOCALE_FORMATS: dict[str, tuple[str, str, str]] = {
    "en": (".", ",", PREFIX),
    "ja": (".", ",", PREFIX),
    "de": (",", ".", SUFFIX),
    "fr": (",", " ", SUFFIX),
    "es": (",", ".", SUFFIX),
    "it": (",", ".", SUFFIX),
    "nl": (",", ".", PREFIX_SPACED),
    "sv": (",", " ", SUFFIX),
    "nb": (",", " ", SUFFIX),
    "da": (",", ".", SUFFIX),
    "fi": (",", " ", SUFFIX),
    "pl": (",", " ", SUFFIX),
    "pt": (",", " ", SUFFIX),
}

_LOCALE_OVERRIDES: dict[str, tuple[str, str, str]] = {
    "de-CH": (".", "’", PREFIX),
    "de-AT": (",", " ", PREFIX_SPACED),
}


def get_country_config(country_code: Optional[str]) -> MarketConfig:
    return COUNTRY_CONFIG.get((country_code or "").strip().lower(), COUNTRY_CONFIG[DEFAULT_COUNTRY])


def detect_country(accept_language: Optional[str]) -> str:
    """Pick a supported market from an Accept-Language header value.

    Only the first language range is considered; its region subtag wins over
    the primary tag ("en-GB" -> "gb", "de" -> "de").
    """
    if not accept_language:
        return DEFAULT_COUNTRY
    first = accept_language.split(",")[0].split(";")[0].strip()
    if not first:
        return DEFAULT_COUNTRY
    parts = first.replace("_", "-").split("-")
    candidate = (parts[1] if len(parts) > 1 and parts[1] else parts[0]).lower()
    if candidate in COUNTRY_CONFIG:
        return candidate
    return DEFAULT_COUNTRY


def _group_digits(digits: str, separator: str) -> str:
    groups: list[str] = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_price(price: float, currency: str = "USD", locale: str = "en-US") -> str:
    decimals = 0 if currency in _ZERO_DECIMAL_CURRENCIES else 2
    language = locale.split("-")[0]
    decimal_sep, group_sep, placement = _LOCALE_OVERRIDES.get(
        locale, _LOCALE_FORMATS.get(language, _LOCALE_FORMATS["en"])
    )
    symbol = _CURRENCY_SYMBOLS.get(currency, currency)

    sign = "-" if price < 0 else ""
    rendered = f"{abs(price):.{decimals}f}"
    whole, _, fraction = rendered.partition(".")
    amount = _group_digits(whole, group_sep)
    if fraction:
        amount = f"{amount}{decimal_sep}{fraction}"

    if placement == SUFFIX:
        return f"{sign}{amount} {symbol}"
    if placement == PREFIX_SPACED or (len(symbol) > 1 and symbol.isalpha()):
        return f"{sign}{symbol} {amount}"
    return f"{sign}{symbol}{amount}"
