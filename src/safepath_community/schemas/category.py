"""The fixed set of discussion categories."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Category(BaseModel):
    """A discussion category. The set is fixed and never user-defined."""

    id: str
    name: str
    description: str = ""
    icon: str = ""
    color: str = ""

    model_config = ConfigDict(frozen=True)


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(
        id="safety",
        name="Safety Tips",
        description="Share and learn practical personal safety advice",
        icon="🛡️",
        color="blue",
    ),
    Category(
        id="incidents",
        name="Incident Reports",
        description="Report and discuss incidents in your area",
        icon="🚨",
        color="red",
    ),
    Category(
        id="routes",
        name="Safe Routes",
        description="Recommend well-lit and busy routes",
        icon="🗺️",
        color="green",
    ),
    Category(
        id="emergency",
        name="Emergency Preparedness",
        description="Plans, kits and drills for emergencies",
        icon="🧰",
        color="orange",
    ),
    Category(
        id="resources",
        name="Resources & Support",
        description="Helplines, shelters and support services",
        icon="🤝",
        color="purple",
    ),
    Category(
        id="general",
        name="General Discussion",
        description="Everything else about staying safe together",
        icon="💬",
        color="gray",
    ),
)

CATEGORIES_BY_ID: dict[str, Category] = {category.id: category for category in DEFAULT_CATEGORIES}


def get_category(category_id: str) -> Category | None:
    """Return the category with ``category_id`` or None if it is not part of the set."""
    return CATEGORIES_BY_ID.get(category_id)
