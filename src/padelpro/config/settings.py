"""Configuration settings for the padel billing application."""

import os
from pathlib import Path
from typing import Any

import yaml

from padelpro.config.env import EnvConfig
from padelpro.config.types import AppConfig
from padelpro.config.types import GlobalConfig
from padelpro.config.types import PricingConfig
from padelpro.config.utils import deep_merge
from padelpro.config.utils import resolve_path
from padelpro.config.validation import validate_pricing_config
from padelpro.exceptions import ConfigError
from padelpro.models.catalog import BarProduct
from padelpro.models.catalog import Court
from padelpro.models.catalog import CourtCategory
from padelpro.models.catalog import PricingTable
from padelpro.models.catalog import ShareOption


DEFAULT_PRICING: PricingConfig = {
    'courts': {
        1: {'name': 'Court 1 (Indoor)', 'category': 'indoor'},
        2: {'name': 'Court 2 (Indoor)', 'category': 'indoor'},
        3: {'name': 'Court 3 (Indoor)', 'category': 'indoor'},
        4: {'name': 'Court 4 (Indoor)', 'category': 'indoor'},
        5: {'name': 'Court 5 (Outdoor)', 'category': 'outdoor'},
        6: {'name': 'Court 6 (Outdoor)', 'category': 'outdoor'},
    },
    'bar_products': {
        'Powerade': 2.0,
        'Acqua': 1.0,
        'Birra': 2.5,
        'Patatine': 1.5,
        'Barreta cereali': 1.5,
        'RedBull': 2.5,
        'Monster': 3.0,
        'Magnesio': 2.5,
        'Coca Cola': 2.0,
        'Pepsi': 2.0,
        'Té': 2.0,
    },
    'court_share_options': [
        {'shares': 1, 'label': 'Pays everything'},
        {'shares': 2, 'label': 'Pays for 2'},
        {'shares': 3, 'label': 'Pays for 3'},
        {'shares': 4, 'label': 'Individual'},
    ],
    'tube_share_options': [
        {'shares': 1, 'label': 'Pays everything (6€)'},
        {'shares': 2, 'label': 'Pays for 2 (3€)'},
        {'shares': 3, 'label': 'Pays for 3 (2€)'},
        {'shares': 4, 'label': 'Individual (1.5€)'},
    ],
    'category_prices': {'indoor': 50, 'outdoor': 40},
    'owner_court_rate': 10,
    'tube_price': 6,
    'overgrip_price': 2.5,
    'default_duration': 90,
}


class ConfigurationManager:
    """Centralized configuration management with caching."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config: AppConfig | None = None
        self._pricing_table: PricingTable | None = None
        self._config_path: Path | None = None
        self._initialized = True

    @property
    def config(self) -> AppConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config() first.")
        return self._config

    @property
    def pricing_table(self) -> PricingTable:
        """Pricing table built from the loaded configuration."""
        if self._pricing_table is None:
            self._pricing_table = build_pricing_table(self.config.pricing)
        return self._pricing_table

    def load_config(self, config_dir: str | None = None) -> AppConfig:
        """Load configuration with caching."""
        if self._config is not None:
            return self._config

        self._config_path = _get_config_path(config_dir)

        global_config = _load_global_config(self._config_path)
        pricing = _load_pricing_config(self._config_path)

        self._config = AppConfig(
            global_config=global_config,
            pricing=pricing,
            config_dir=str(self._config_path),
            db_path=str(resolve_path(global_config.get('db_path', 'data/padelpro.db'), self._config_path)),
            log_level=global_config.get('log_level', 'WARNING'),
            log_file=global_config.get('log_file')
        )

        return self._config

    def reload_config(self, config_dir: str | None = None) -> AppConfig:
        """Force reload configuration."""
        self._config = None
        self._pricing_table = None
        return self.load_config(config_dir)

def _get_config_path(config_dir: str | None = None) -> Path:
    """Get configuration directory path."""
    return resolve_path(
        config_dir or os.getenv("PADELPRO_CONFIG_DIR", os.getcwd())
    )

def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", {"file": str(path)}) from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Expected a mapping in {path}", {"file": str(path)})
    return loaded

def _load_global_config(config_path: Path) -> GlobalConfig:
    """Load global configuration from ``config.yaml`` and the environment.

    Environment variables win over the file.
    """
    global_config: dict[str, Any] = dict(EnvConfig.get_global_config())

    config_file = config_path / "config.yaml"
    if config_file.exists():
        global_config = deep_merge(global_config, _read_yaml(config_file))
        EnvConfig.update_config_from_env(global_config)

    return global_config  # type: ignore[return-value]

def _load_pricing_config(config_path: Path) -> PricingConfig:
    """Load ``pricing.yaml`` merged over the default pricing table."""
    pricing: dict[str, Any] = dict(DEFAULT_PRICING)

    pricing_file = config_path / "pricing.yaml"
    if pricing_file.exists():
        overrides = _read_yaml(pricing_file)
        # Share menus are replaced wholesale, not merged item by item
        pricing = deep_merge(pricing, overrides)

    validate_pricing_config(pricing)
    return pricing  # type: ignore[return-value]

def build_pricing_table(pricing: PricingConfig | dict[str, Any] | None = None) -> PricingTable:
    """Build a ``PricingTable`` from a pricing configuration.

    Args:
        pricing: Validated pricing configuration, defaults when omitted

    Returns:
        Immutable pricing table
    """
    if pricing is None:
        pricing = DEFAULT_PRICING
    validate_pricing_config(pricing)  # type: ignore[arg-type]

    courts = {
        int(court_id): Court(
            id=int(court_id),
            name=court.get('name', f"Court {court_id}"),
            category=CourtCategory.parse(court['category']),
            price=float(court['price']) if 'price' in court else None,
        )
        for court_id, court in pricing['courts'].items()
    }
    products = {
        name: BarProduct(name=name, price=float(price))
        for name, price in pricing['bar_products'].items()
    }

    def _options(key: str) -> tuple[ShareOption, ...]:
        return tuple(
            ShareOption(shares=int(option['shares']), label=str(option.get('label', option['shares'])))
            for option in pricing[key]
        )

    return PricingTable(
        courts=courts,
        bar_products=products,
        court_share_options=_options('court_share_options'),
        tube_share_options=_options('tube_share_options'),
        category_prices={
            CourtCategory.parse(category): float(price)
            for category, price in pricing['category_prices'].items()
        },
        owner_court_rate=float(pricing['owner_court_rate']),
        tube_price=float(pricing['tube_price']),
        overgrip_price=float(pricing['overgrip_price']),
        default_duration=int(pricing['default_duration']),
    )

def load_config(config_dir: str | None = None) -> AppConfig:
    """Load configuration using the ConfigurationManager."""
    config_manager = ConfigurationManager()
    return config_manager.load_config(config_dir)
