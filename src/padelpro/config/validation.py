"""Configuration validation utilities."""

from typing import Any

from padelpro.exceptions import ConfigError
from padelpro.models.catalog import CourtCategory

REQUIRED_PRICING_KEYS = (
    "courts",
    "bar_products",
    "court_share_options",
    "tube_share_options",
    "category_prices",
    "owner_court_rate",
    "tube_price",
    "overgrip_price",
    "default_duration",
)


def _require_positive(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{name} must be a positive number", {"key": name, "value": value})


def _validate_category(value: Any, context: dict[str, Any]) -> None:
    try:
        CourtCategory.parse(value)
    except ValueError:
        raise ConfigError(f"Unknown court category {value!r}", context) from None


def validate_courts(courts: Any) -> None:
    """Validate the court table."""
    if not isinstance(courts, dict) or not courts:
        raise ConfigError("At least one court must be configured", {"key": "courts"})

    for court_id, court in courts.items():
        try:
            int(court_id)
        except (TypeError, ValueError):
            raise ConfigError(f"Court id {court_id!r} is not an integer", {"court_id": court_id}) from None
        if not isinstance(court, dict):
            raise ConfigError(f"Invalid configuration for court {court_id}", {"court_id": court_id})
        if "category" not in court:
            raise ConfigError(
                f"Missing required fields for court {court_id}",
                {"court_id": court_id, "missing_fields": ["category"]}
            )
        _validate_category(court["category"], {"court_id": court_id})
        if "price" in court:
            _require_positive(court["price"], f"courts.{court_id}.price")


def validate_share_options(options: Any, name: str) -> None:
    """Validate a share menu: positive, unique divisors."""
    if not isinstance(options, list) or not options:
        raise ConfigError(f"{name} must be a non-empty list", {"key": name})

    seen: set[int] = set()
    for option in options:
        if not isinstance(option, dict) or "shares" not in option:
            raise ConfigError(f"Invalid entry in {name}", {"key": name, "entry": option})
        shares = option["shares"]
        if isinstance(shares, bool) or not isinstance(shares, int) or shares < 1:
            raise ConfigError(f"Share divisor must be a positive integer in {name}", {"key": name, "shares": shares})
        if shares in seen:
            raise ConfigError(f"Duplicate share divisor {shares} in {name}", {"key": name, "shares": shares})
        seen.add(shares)


def validate_pricing_config(config: dict[str, Any]) -> None:
    """Validate a complete pricing configuration.

    Raises:
        ConfigError: On the first problem found
    """
    missing = [key for key in REQUIRED_PRICING_KEYS if key not in config]
    if missing:
        raise ConfigError("Missing pricing configuration keys", {"missing_fields": missing})

    validate_courts(config["courts"])

    products = config["bar_products"]
    if not isinstance(products, dict):
        raise ConfigError("bar_products must be a mapping of name to price", {"key": "bar_products"})
    for name, price in products.items():
        _require_positive(price, f"bar_products.{name}")

    validate_share_options(config["court_share_options"], "court_share_options")
    validate_share_options(config["tube_share_options"], "tube_share_options")

    category_prices = config["category_prices"]
    if not isinstance(category_prices, dict):
        raise ConfigError("category_prices must be a mapping", {"key": "category_prices"})
    for category, price in category_prices.items():
        _validate_category(category, {"key": "category_prices"})
        _require_positive(price, f"category_prices.{category}")

    priced = {CourtCategory.parse(category) for category in category_prices}
    for court_id, court in config["courts"].items():
        if "price" not in court and CourtCategory.parse(court["category"]) not in priced:
            raise ConfigError(
                f"Court {court_id} has no price and its category has none either",
                {"court_id": court_id, "category": court["category"]}
            )

    for key in ("owner_court_rate", "tube_price", "overgrip_price", "default_duration"):
        _require_positive(config[key], key)
