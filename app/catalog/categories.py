"""Category vocabulary shared by the matcher and the outgoing query builder."""

from dataclasses import dataclass

from app.schemas.listing import ListingRecord

ALL = "all"
TRENDING = "Trending"


@dataclass(frozen=True)
class Category:
    id: str
    label: str
    substrings: tuple[str, ...]
    property_type: str


CATEGORIES: tuple[Category, ...] = (
    Category("Apartment", "Apartments", ("apartment",), "Apartment"),
    Category("House", "Houses", ("house",), "House"),
    Category("Villa", "Villas", ("villa",), "Villa"),
    Category("Condo", "Condos", ("condo",), "Condo"),
    Category("Cabin", "Cabins", ("cabin",), "Cabin"),
    Category("Beach", "Beach", ("beach",), "Beach"),
    Category("Lakefront", "Lakefront", ("lake", "lakefront"), "Lakefront"),
    Category("Amazing", "Amazing views", ("amazing", "view"), "Amazing views"),
    Category("Tiny", "Tiny homes", ("tiny",), "Tiny homes"),
    Category("Mansion", "Mansions", ("mansion",), "Mansion"),
    Category("Countryside", "Countryside", ("country",), "Countryside"),
    Category("Luxury", "Luxury", ("luxury",), "Luxury"),
    Category("Castles", "Castles", ("castle",), "Castle"),
    Category("Tropical", "Tropical", ("tropical",), "Tropical"),
    Category("Historic", "Historic", ("historic",), "Historic"),
    Category("Design", "Design", ("design",), "Design"),
    Category("Farm", "Farm", ("farm",), "Farm"),
    Category("Treehouse", "Treehouse", ("tree",), "Treehouse"),
    Category("Boat", "Boat", ("boat",), "Boat"),
    Category("Container", "Container", ("container",), "Container"),
    Category("Dome", "Dome", ("dome",), "Dome"),
    Category("Windmill", "Windmill", ("windmill",), "Windmill"),
    Category("Cave", "Cave", ("cave",), "Cave"),
    Category("Camping", "Camping", ("camp",), "Camping"),
    Category("Arctic", "Arctic", ("arctic",), "Arctic"),
    Category("Desert", "Desert", ("desert",), "Desert"),
    Category("Ski-in/out", "Ski-in/out", ("ski",), "Ski-in/out"),
    Category("Vineyard", "Vineyard", ("vineyard", "vine"), "Vineyard"),
)

# Keyed by the normalized id so selectors match regardless of case
_BY_KEY: dict[str, Category] = {c.id.strip().lower(): c for c in CATEGORIES}

MENU: tuple[tuple[str, str], ...] = (
    (ALL, "All"),
    (TRENDING, "Trending"),
    *((c.id, c.label) for c in CATEGORIES),
)


def _normalize(value: str | None) -> str:
    return (value or "").strip().lower()


def lookup(category_id: str | None) -> Category | None:
    return _BY_KEY.get(_normalize(category_id))


def category_property_type(category_id: str | None) -> str:
    """Canonical propertyType for a category id, or the id itself."""
    if not category_id:
        return ""
    category = lookup(category_id)
    return category.property_type if category else category_id


def matches(listing: ListingRecord, selector: str) -> bool:
    """Decide whether a listing belongs to the selected category.

    ``"all"`` admits everything and ``"Trending"`` admits only listings
    flagged as trending. Any other selector is matched as a substring of the
    listing's ``category`` or ``propertyType``, using the synonyms of the
    known categories (e.g. ``Lakefront`` also matches ``"lake"``).
    """
    if selector == ALL:
        return True
    if selector == TRENDING:
        return listing.trending is True

    fields = (_normalize(listing.category), _normalize(listing.property_type))
    key = _normalize(selector)
    category = _BY_KEY.get(key)
    substrings = category.substrings if category else (key,)

    return any(sub in field for field in fields for sub in substrings)
