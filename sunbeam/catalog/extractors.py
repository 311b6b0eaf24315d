"""Attribute extractors for free-text product fields.

Each extractor is a pure function over description, tags or vendor.
A text that does not match a pattern yields None or an empty tuple;
extractors never raise on content, and accept None for missing text.
"""

import re
from collections.abc import Iterable

from sunbeam.catalog.models import Condition, Dimensions, Era, Room, Size, Style
from sunbeam.catalog.taxonomy import MATERIAL_KEYWORDS, style_for_vendor

_ROOMS = {room.value: room for room in Room}
_STYLES = {style.value: style for style in Style}
_ERAS = {era.value: era for era in Era}

_CONDITION_SECTION = re.compile(r"CONDITION\s*\n\s*(Excellent|Good|Fair|Poor)", re.IGNORECASE)
_CONDITION_SECTION_GRADES = {
    "excellent": Condition.EXCELLENT,
    "good": Condition.GOOD,
    "fair": Condition.FAIR,
    "poor": Condition.FAIR,
}
# First phrase found wins, in this order
_CONDITION_PHRASES = (
    (("excellent condition",), Condition.EXCELLENT),
    (("good condition",), Condition.GOOD),
    (("fair condition",), Condition.FAIR),
    (("as found", "as-found"), Condition.AS_FOUND),
)

# Optional century prefix; without one the decade is read as 19x0s
_DECADE_PATTERN = re.compile(r"\b(19|20)?([0-9])0['’]?s\b")

_NUMBER = r"(\d+(?:\.\d+)?)"
_WDH_PATTERN = re.compile(
    rf'{_NUMBER}"?\s*W[,\s]+{_NUMBER}"?\s*D[,\s]+{_NUMBER}"?\s*H', re.IGNORECASE
)
_WDH_X_PATTERN = re.compile(
    rf'{_NUMBER}"\s*W\s*x\s*{_NUMBER}"\s*D\s*x\s*{_NUMBER}"\s*H', re.IGNORECASE
)
_SEAT_HEIGHT_PATTERN = re.compile(rf'(?:SH|Seat Height):\s*{_NUMBER}"', re.IGNORECASE)
_DIAMETER_PATTERN = re.compile(rf'{_NUMBER}"?\s*(?:Diameter|Dia\.?)', re.IGNORECASE)

_WHITESPACE = re.compile(r"\s+")
_QUOTES = str.maketrans({
    "“": '"',
    "”": '"',
    "″": '"',
    "‘": "'",
    "’": "'",
})

# Upper bounds (exclusive) of the size classes, in inches
SIZE_THRESHOLDS = (
    (24.0, Size.SMALL),
    (48.0, Size.MEDIUM),
    (72.0, Size.LARGE),
)


def extract_rooms(tags: Iterable[str] | None) -> tuple[Room, ...]:
    """Get the tags that exactly name a room, in tag order.

    Args:
        tags: Product tags.

    Returns:
        Matching rooms.
    """
    return tuple(_ROOMS[tag] for tag in tags or () if tag in _ROOMS)


def extract_style(vendor: str | None, tags: Iterable[str] | None) -> Style | None:
    """Classify a product's style.

    The vendor mapping wins, then the first tag naming a style exactly,
    then the first tag mentioning "mid century" in any spelling.

    Args:
        vendor: Vendor name.
        tags: Product tags.

    Returns:
        Style if any rule applies, None otherwise.
    """
    style = style_for_vendor(vendor)
    if style is not None:
        return style

    tags = list(tags or ())
    for tag in tags:
        if tag in _STYLES:
            return _STYLES[tag]

    for tag in tags:
        lowered = tag.lower()
        if "mid century" in lowered or "mid-century" in lowered:
            return Style.MID_CENTURY

    return None


def extract_condition(description: str | None) -> Condition | None:
    """Parse the condition grade from a description.

    A "CONDITION" section header followed by a grade takes precedence over
    condition phrases found elsewhere in the text.

    Args:
        description: Product description.

    Returns:
        Condition if stated, None otherwise.
    """
    if not description:
        return None

    section = _CONDITION_SECTION.search(description)
    if section:
        return _CONDITION_SECTION_GRADES[section.group(1).lower()]

    lowered = description.lower()
    for phrases, condition in _CONDITION_PHRASES:
        if any(phrase in lowered for phrase in phrases):
            return condition
    return None


def extract_era(description: str | None, tags: Iterable[str] | None = None) -> Era | None:
    """Identify the decade a piece was made in.

    Era labels are searched for literally first; otherwise decade
    mentions such as "70s", "1960's" or "2000s" are rebuilt into a
    four-digit label. The first decade mention wins; a bare two-digit
    decade is read as 19xx.

    Args:
        description: Product description.
        tags: Product tags.

    Returns:
        Era if one is mentioned, None otherwise.
    """
    text = f"{description or ''} {' '.join(tags or ())}".lower()
    if not text.strip():
        return None

    for era in Era:
        if era.value.lower() in text:
            return era

    match = _DECADE_PATTERN.search(text)
    if match is None:
        return None
    base = 2000 if match.group(1) == "20" else 1900
    return _ERAS.get(f"{base + int(match.group(2)) * 10}s")


def extract_materials(description: str | None) -> tuple[str, ...]:
    """Find known materials mentioned in a description.

    Args:
        description: Product description.

    Returns:
        Capitalized materials in vocabulary order, without duplicates.
    """
    if not description:
        return ()

    lowered = description.lower()
    found: list[str] = []
    seen: set[str] = set()
    for keyword in MATERIAL_KEYWORDS:
        if keyword in lowered and keyword not in seen:
            seen.add(keyword)
            found.append(keyword[0].upper() + keyword[1:])
    return tuple(found)


def normalize_measurement_text(description: str) -> str:
    """Collapse whitespace and straighten typographic quotes."""
    return _WHITESPACE.sub(" ", description).translate(_QUOTES)


def extract_dimensions(description: str | None) -> Dimensions | None:
    """Parse measurements (in inches) from a description.

    Recognized forms:
        35"W, 45"D, 30"H
        35" W x 45" D x 30" H
        SH: 18"  /  Seat Height: 18"
        24" Diameter  /  24" Dia.

    Only the first match of each form is used.

    Args:
        description: Product description.

    Returns:
        Dimensions with whatever was found, None if nothing was.
    """
    if not description:
        return None

    text = normalize_measurement_text(description)
    found: dict[str, float] = {}

    triple = _WDH_PATTERN.search(text) or _WDH_X_PATTERN.search(text)
    if triple:
        found["width"] = float(triple.group(1))
        found["depth"] = float(triple.group(2))
        found["height"] = float(triple.group(3))

    seat_height = _SEAT_HEIGHT_PATTERN.search(text)
    if seat_height:
        found["seat_height"] = float(seat_height.group(1))

    diameter = _DIAMETER_PATTERN.search(text)
    if diameter:
        found["diameter"] = float(diameter.group(1))

    if not found:
        return None
    return Dimensions(**found)


def size_from_dimensions(dimensions: Dimensions | None) -> Size | None:
    """Classify size by the largest of width, depth, height and diameter.

    Args:
        dimensions: Parsed measurements.

    Returns:
        Size class, or None without usable measurements.
    """
    if dimensions is None:
        return None

    values = [
        value
        for value in (dimensions.width, dimensions.depth, dimensions.height, dimensions.diameter)
        if value is not None
    ]
    if not values:
        return None

    largest = max(values)
    for upper, size in SIZE_THRESHOLDS:
        if largest < upper:
            return size
    return Size.EXTRA_LARGE
