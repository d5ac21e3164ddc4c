"""
Category mapping for the browse-by views.

Three taxonomies, each with its own fallback rule:
- strength: fixed list, exact case-sensitive match, unmatched cigars are excluded
- country: fixed list, case-insensitive match, unmatched cigars fold into "Other Countries"
- wrapper: open-ended, every distinct value is a bucket, blank becomes "Unknown"
"""

from typing import Any, NamedTuple, Optional

from exceptions import InvalidDimensionError
from models.analytics import BrowseDimension


class Category(NamedTuple):
    """Display label and the value the humidor list filters on."""

    label: str
    filter_value: str


UNKNOWN = "Unknown"
OTHER_COUNTRIES = Category("Other Countries", "Other")

STRENGTH_CATEGORIES: tuple[Category, ...] = (
    Category("Mild Cigars", "Mild"),
    Category("Mild to Medium Cigars", "Mild-Medium"),
    Category("Medium Cigars", "Medium"),
    Category("Medium to Full Cigars", "Medium-Full"),
    Category("Full Bodied Cigars", "Full"),
)

COUNTRY_CATEGORIES: tuple[Category, ...] = (
    Category("Dominican Cigars", "Dominican Republic"),
    Category("Nicaraguan Cigars", "Nicaragua"),
    Category("Honduran Cigars", "Honduras"),
    Category("American Cigars", "USA"),
    Category("Cuban Cigars", "Cuba"),
    Category("Mexican Cigars", "Mexico"),
    OTHER_COUNTRIES,
)


def _as_text(raw_value: Any) -> str:
    """Stringify a raw field; None and non-strings other than numbers become ''."""
    if raw_value is None or isinstance(raw_value, bool):
        return ""
    if isinstance(raw_value, (str, int, float)):
        return str(raw_value).strip()
    return ""


def classify_strength(raw_value: Any) -> Optional[str]:
    """
    Map a strength value to its bucket label.

    Returns None for anything outside the taxonomy, so the cigar is
    left out of strength totals.
    """
    if not isinstance(raw_value, str):
        return None
    for category in STRENGTH_CATEGORIES:
        if raw_value == category.filter_value:
            return category.label
    return None


def classify_country(raw_value: Any) -> str:
    """
    Map a country to its bucket label.

    Matching ignores case. Blank countries are read as "Unknown", which
    is not in the catalog, so they land in "Other Countries" with every
    other unlisted country.
    """
    country = _as_text(raw_value) or UNKNOWN
    folded = country.casefold()
    for category in COUNTRY_CATEGORIES:
        if category is OTHER_COUNTRIES:
            continue
        if category.filter_value.casefold() == folded:
            return category.label
    return OTHER_COUNTRIES.label


def classify_wrapper(raw_value: Any) -> str:
    """Wrappers are their own bucket; blank becomes "Unknown"."""
    return _as_text(raw_value) or UNKNOWN


_CLASSIFIERS = {
    BrowseDimension.WRAPPER: classify_wrapper,
    BrowseDimension.STRENGTH: classify_strength,
    BrowseDimension.COUNTRY: classify_country,
}


def parse_dimension(dimension: Any) -> BrowseDimension:
    """Resolve a dimension name; raises InvalidDimensionError if unknown."""
    if isinstance(dimension, BrowseDimension):
        return dimension
    try:
        return BrowseDimension(str(dimension).lower())
    except ValueError:
        raise InvalidDimensionError(str(dimension), [d.value for d in BrowseDimension])


def classify(dimension: Any, raw_value: Any) -> Optional[str]:
    """
    Classify a raw field value for one dimension.

    Args:
        dimension: "wrapper", "strength" or "country"
        raw_value: Value straight from the cigar document

    Returns:
        Bucket label, or None when the value is excluded from the taxonomy
    """
    return _CLASSIFIERS[parse_dimension(dimension)](raw_value)


def categories_for(dimension: Any) -> tuple[Category, ...]:
    """Fixed taxonomy for strength/country; wrapper has none."""
    dimension = parse_dimension(dimension)
    if dimension == BrowseDimension.STRENGTH:
        return STRENGTH_CATEGORIES
    if dimension == BrowseDimension.COUNTRY:
        return COUNTRY_CATEGORIES
    return ()
