"""
Static pricing and catalog models: courts, bar products and share menus.
"""

from dataclasses import dataclass, field
from enum import Enum

from padelpro.exceptions import NotFoundError, ValidationError


class CourtCategory(str, Enum):
    """Court category, drives the base rental price."""
    INDOOR = "indoor"
    OUTDOOR = "outdoor"

    @classmethod
    def parse(cls, value: str) -> "CourtCategory":
        """Parse a category, accepting the legacy interior/exterior names."""
        aliases = {"interior": cls.INDOOR, "exterior": cls.OUTDOOR}
        normalized = str(value).strip().lower()
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


@dataclass(frozen=True)
class Court:
    """A rentable court. Without its own price it bills at its category price."""
    id: int
    name: str
    category: CourtCategory
    price: float | None = None


@dataclass(frozen=True)
class BarProduct:
    """Bar catalog entry."""
    name: str
    price: float


@dataclass(frozen=True)
class ShareOption:
    """One entry of a cost-splitting menu."""
    shares: int
    label: str


@dataclass(frozen=True)
class PricingTable:
    """Reference data supplied at startup.

    Courts are keyed by id and products by name. The share menus list the
    divisors staff can pick for the court fee and the ball tube.
    """
    courts: dict[int, Court]
    bar_products: dict[str, BarProduct]
    court_share_options: tuple[ShareOption, ...]
    tube_share_options: tuple[ShareOption, ...]
    category_prices: dict[CourtCategory, float] = field(default_factory=lambda: {
        CourtCategory.INDOOR: 50.0,
        CourtCategory.OUTDOOR: 40.0,
    })
    owner_court_rate: float = 10.0
    tube_price: float = 6.0
    overgrip_price: float = 2.5
    default_duration: int = 90

    def get_court(self, court_id: int) -> Court:
        """Look up a court by id."""
        try:
            return self.courts[court_id]
        except KeyError:
            raise NotFoundError(f"Unknown court {court_id}", {"court_id": court_id}) from None

    def get_product(self, name: str) -> BarProduct:
        """Look up a bar product by name."""
        try:
            return self.bar_products[name]
        except KeyError:
            raise NotFoundError(f"Unknown bar product {name!r}", {"product": name}) from None

    def court_base_price(self, court: Court) -> float:
        """Base rental price: the court's own price, else its category price."""
        if court.price is not None:
            return court.price
        try:
            return self.category_prices[court.category]
        except KeyError:
            raise NotFoundError(
                f"No price configured for court {court.id}",
                {"court_id": court.id, "category": court.category.value}
            ) from None

    def check_court_share(self, shares: int) -> None:
        """Reject a court divisor that is not on the menu (0 clears it)."""
        _check_share(shares, self.court_share_options, "court")

    def check_tube_share(self, shares: int) -> None:
        """Reject a tube divisor that is not on the menu (0 clears it)."""
        _check_share(shares, self.tube_share_options, "tube")


def _check_share(shares: int, options: tuple[ShareOption, ...], dimension: str) -> None:
    allowed = {option.shares for option in options}
    if shares != 0 and shares not in allowed:
        raise ValidationError(
            f"Invalid {dimension} share {shares}",
            {"shares": shares, "allowed": sorted(allowed)}
        )
