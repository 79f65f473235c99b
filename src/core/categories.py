from dataclasses import dataclass
from typing import Dict

from core.entities import Category


@dataclass(frozen=True)
class CategorySpec:
    """
    Declarative category definition.
    """
    category: Category
    display_name: str
    view: str
    default_limit: int = 80


RENT = CategorySpec(
    category=Category.RENT,
    display_name="Rent",
    view="rent_posts_view",
)

MARKET = CategorySpec(
    category=Category.MARKET,
    display_name="Market",
    view="secondhand_posts_view",
)

RIDE = CategorySpec(
    category=Category.RIDE,
    display_name="Carpool",
    view="ride_posts_view",
)

TEAM = CategorySpec(
    category=Category.TEAM,
    display_name="Groups",
    view="team_posts_view",
)

FORUM = CategorySpec(
    category=Category.FORUM,
    display_name="Forum",
    view="forum_posts_view",
)


ALL_CATEGORIES: Dict[Category, CategorySpec] = {
    spec.category: spec for spec in (RENT, MARKET, RIDE, TEAM, FORUM)
}
