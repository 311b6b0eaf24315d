"""Category taxonomy and classification vocabularies.

Storefront product types are inconsistent ("Sofas & Loveseats" vs.
"Sofas & Couches"). This module folds them into a canonical category
vocabulary and groups the canonical categories for navigation.

Normalization example:
    Sofas & Loveseats  -> Sofas
    Sofas & Couches    -> Sofas
    Hat Racks          -> Hat Racks   (unmapped, passed through)
"""

from dataclasses import dataclass
from types import MappingProxyType

from sunbeam.catalog.models import Style

UNCATEGORIZED = "Uncategorized"

CATEGORY_NORMALIZATION = MappingProxyType({
    # Seating
    "Accent Chairs": "Accent Chairs",
    "Accent & Arm Chairs": "Accent Chairs",
    "Sectionals & Modular Seating": "Sectionals & Modular",
    "Sofas & Loveseats": "Sofas",
    "Sofas & Couches": "Sofas",
    "Loveseats & Settees": "Loveseats",
    "Office Chairs": "Office Chairs",
    "Dining Chairs": "Dining Chairs",
    "Bar Stools": "Bar Stools",
    # Tables
    "Coffee Tables": "Coffee Tables",
    "Side Tables": "Side Tables",
    "Nightstands": "Nightstands",
    "Dining Tables": "Dining Tables",
    "Dining Sets": "Dining Sets",
    "Tables": "Tables",
    "Desks": "Desks",
    # Storage
    "Dressers & Chests": "Dressers",
    "Consoles & Media Storage": "Media Consoles",
    "Bookcases & Shelving": "Bookcases",
    "Bookcases & Shelving Units": "Bookcases",
    # Lighting
    "Floor Lamps": "Floor Lamps",
    "Table & Desk Lamps": "Table Lamps",
    "Pendants & Chandeliers": "Pendants & Chandeliers",
    # Decor
    "Art & Wall Hangings": "Wall Art",
    "Rugs": "Rugs",
    "Vases & Sculptures": "Decorative Objects",
    "Trays, Bowls & Objects": "Decorative Objects",
    "Serveware & Entertaining": "Serveware",
})

VENDOR_STYLES = MappingProxyType({
    "Vintage": Style.VINTAGE,
    "Modern": Style.MODERN,
    "Contemporary": Style.CONTEMPORARY,
    "Contemporary, Newly Made": Style.CONTEMPORARY,
    "Sunbeam Exclusive": Style.VINTAGE,
    "Sunbeam Vintage": Style.VINTAGE,
})

# Searched as lowercase substrings; result order follows this tuple
MATERIAL_KEYWORDS = (
    "walnut", "oak", "teak", "mahogany", "pine", "cherry", "maple", "rosewood",
    "bamboo", "rattan", "wicker", "brass", "chrome", "steel", "iron", "copper",
    "gold", "aluminum", "velvet", "leather", "linen", "cotton", "wool", "silk",
    "bouclé", "boucle", "tweed", "glass", "ceramic", "marble", "granite",
    "travertine", "lucite", "acrylic", "plastic", "resin", "lacquer", "laminate",
    "veneer", "upholstered", "cork", "tile", "wood",
)


@dataclass(frozen=True)
class CategoryGroup:
    """Navigation group of canonical categories.

    Attributes:
        key: Group identifier (e.g., "furniture").
        label: Display label.
        categories: Canonical categories in display order.
    """

    key: str
    label: str
    categories: tuple[str, ...]

    def __contains__(self, category: str) -> bool:
        return category in self.categories


CATEGORY_GROUPS = (
    CategoryGroup(
        key="furniture",
        label="Furniture",
        categories=(
            "Sofas",
            "Loveseats",
            "Sectionals & Modular",
            "Accent Chairs",
            "Office Chairs",
            "Dining Chairs",
            "Bar Stools",
            "Coffee Tables",
            "Side Tables",
            "Nightstands",
            "Dining Tables",
            "Dining Sets",
            "Desks",
            "Dressers",
            "Media Consoles",
            "Bookcases",
        ),
    ),
    CategoryGroup(
        key="lighting",
        label="Lighting",
        categories=("Floor Lamps", "Table Lamps", "Pendants & Chandeliers"),
    ),
    CategoryGroup(
        key="decor",
        label="Art & Decor",
        categories=("Wall Art", "Rugs", "Decorative Objects", "Serveware"),
    ),
    CategoryGroup(
        key="kitchen",
        label="Kitchen & Dining",
        categories=(
            "Dinnerware",
            "Glassware",
            "Serveware",
            "Bar Accessories",
            "Cookware",
        ),
    ),
)


def normalize_category(category: str | None) -> str:
    """Map a storefront product type to its canonical category.

    Unmapped labels are returned unchanged. A blank label becomes
    ``UNCATEGORIZED`` so the result is never empty.

    Args:
        category: Raw product type.

    Returns:
        Canonical category label.
    """
    if not category or not category.strip():
        return UNCATEGORIZED
    return CATEGORY_NORMALIZATION.get(category, category)


def style_for_vendor(vendor: str | None) -> Style | None:
    """Look up the style implied by a vendor name."""
    if not vendor:
        return None
    return VENDOR_STYLES.get(vendor)


def category_group_for(category: str) -> CategoryGroup | None:
    """Get the first navigation group containing a canonical category.

    Args:
        category: Canonical category.

    Returns:
        CategoryGroup if found, None otherwise.
    """
    for group in CATEGORY_GROUPS:
        if category in group:
            return group
    return None
