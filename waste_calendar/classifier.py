"""
This module maps free-text fraction names to waste categories.

The rule table is ordered and the first matching rule wins, so a name such as
"Spesialavfall (bio)" ends up as special, not bio.
"""
import logging
from typing import Optional, Tuple

from .models import WasteCategory

# Get a logger instance for this module
logger = logging.getLogger(__name__)

CLASSIFICATION_RULES: Tuple[Tuple[Tuple[str, ...], WasteCategory], ...] = (
    (("rest",), WasteCategory.GENERAL),
    (("papir", "papp"), WasteCategory.PAPER),
    (("glass",), WasteCategory.GLASS),
    (("plast", "plastic"), WasteCategory.PLASTIC),
    (("spesial", "special"), WasteCategory.SPECIAL),
    (("tekstil",), WasteCategory.CLOTHES),
    (("hage", "garden"), WasteCategory.GARDEN),
    (("hvitevarer", "EE", "farlig"), WasteCategory.ELECTRICAL),
    (("mat", "bio", "organic"), WasteCategory.BIO),
)


def classify(name: str) -> Optional[WasteCategory]:
    """
    Classifies a fraction name.

    Args:
        name: The fraction name as delivered by the feed, e.g. "Restavfall".

    Returns:
        The matching WasteCategory, or None when no keyword matches.
    """
    name_lower = (name or "").lower()
    for keywords, category in CLASSIFICATION_RULES:
        if any(keyword.lower() in name_lower for keyword in keywords):
            return category
    return None


def classify_fraction(fraction) -> Optional[WasteCategory]:
    """Classifies a FractionDefinition and logs names that match nothing."""
    category = classify(fraction.name)
    if category is None:
        logger.info(f"Fraction {fraction.id} '{fraction.name}' does not match any waste category.")
    return category


def keywords_for(category: WasteCategory) -> Tuple[str, ...]:
    """Returns the keywords of the rule for a category."""
    for keywords, rule_category in CLASSIFICATION_RULES:
        if rule_category is category:
            return keywords
    return ()
