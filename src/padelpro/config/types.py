"""Configuration type definitions."""

from dataclasses import dataclass
from typing import Dict, List, Optional, TypedDict


class CourtConfig(TypedDict, total=False):
    """Court configuration. Only ``category`` is required."""
    name: str
    category: str
    price: float

class ShareOptionConfig(TypedDict):
    """Share menu entry."""
    shares: int
    label: str

class PricingConfig(TypedDict):
    """Pricing table as read from ``pricing.yaml``."""
    courts: Dict[int, CourtConfig]
    bar_products: Dict[str, float]
    court_share_options: List[ShareOptionConfig]
    tube_share_options: List[ShareOptionConfig]
    category_prices: Dict[str, float]
    owner_court_rate: float
    tube_price: float
    overgrip_price: float
    default_duration: int

class GlobalConfig(TypedDict, total=False):
    """Global configuration structure."""
    db_path: str
    log_level: str
    log_file: Optional[str]

@dataclass
class AppConfig:
    """Application configuration."""
    global_config: GlobalConfig
    pricing: PricingConfig
    config_dir: str
    db_path: str
    log_level: str = 'WARNING'
    log_file: Optional[str] = None
