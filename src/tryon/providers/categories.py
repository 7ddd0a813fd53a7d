"""Garment category inference for the FASHN try-on path.

Descriptors come from the shop catalogue and are a mix of French and
English ("robe rouge", "denim jacket"). Matching is substring based on the
lowercased descriptor, checked in a fixed priority order: one-piece terms
first, then bottoms, then tops. The first matching group wins.
"""

from __future__ import annotations

from enum import StrEnum


class GarmentCategory(StrEnum):
    AUTO = "auto"
    TOPS = "tops"
    BOTTOMS = "bottoms"
    ONE_PIECES = "one-pieces"


ONE_PIECE_TERMS: tuple[str, ...] = (
    "robe",
    "dress",
    "combinaison",
    "jumpsuit",
    "ensemble",
    "maillot",
    "bikini",
    "swimsuit",
    "one-piece",
)

BOTTOM_TERMS: tuple[str, ...] = (
    "pantalon",
    "pants",
    "jean",
    "short",
    "jupe",
    "skirt",
    "legging",
    "bas",
    "bottom",
)

TOP_TERMS: tuple[str, ...] = (
    "haut",
    "top",
    "shirt",
    "chemise",
    "blouse",
    "pull",
    "sweater",
    "veste",
    "jacket",
    "manteau",
    "coat",
)

_PRIORITY: tuple[tuple[GarmentCategory, tuple[str, ...]], ...] = (
    (GarmentCategory.ONE_PIECES, ONE_PIECE_TERMS),
    (GarmentCategory.BOTTOMS, BOTTOM_TERMS),
    (GarmentCategory.TOPS, TOP_TERMS),
)


def detect_category(descriptor: str | None) -> GarmentCategory:
    """Infer a category from a free-text clothing descriptor."""

    if not descriptor:
        return GarmentCategory.AUTO
    lowered = descriptor.lower()
    for category, terms in _PRIORITY:
        if any(term in lowered for term in terms):
            return category
    return GarmentCategory.AUTO


def resolve_category(
    explicit: str | GarmentCategory | None, descriptor: str | None
) -> GarmentCategory:
    """Explicit non-``auto`` categories win; otherwise infer from the descriptor."""

    if explicit and explicit != GarmentCategory.AUTO:
        return GarmentCategory(explicit)
    return detect_category(descriptor)


__all__ = [
    "BOTTOM_TERMS",
    "GarmentCategory",
    "ONE_PIECE_TERMS",
    "TOP_TERMS",
    "detect_category",
    "resolve_category",
]
