"""Jewelry placement instructions and KIE prompt builders."""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping


class JewelryType(StrEnum):
    EARRINGS = "earrings"
    NECKLACE = "necklace"
    RING = "ring"
    BRACELET = "bracelet"
    ANKLET = "anklet"
    SET = "set"


PLACEMENT_INSTRUCTIONS: Mapping[JewelryType, str] = MappingProxyType(
    {
        JewelryType.EARRINGS: (
            "Place the earrings exactly at the earlobe piercing points. Size them "
            "proportionally (1/4 to 1/2 of ear height). Ensure symmetry for both ears "
            "and follow any head tilt angle."
        ),
        JewelryType.NECKLACE: (
            "Place the necklace chain in the suprasternal notch (neck hollow). The "
            "pendant should hang centered on the chest. The chain must wrap around the "
            "neck naturally following its cylindrical shape."
        ),
        JewelryType.RING: (
            "Place the ring on the appropriate finger with the band wrapping around "
            "naturally. Size it proportionally to the finger and match the hand angle "
            "and perspective."
        ),
        JewelryType.BRACELET: (
            "Place the bracelet just above the wrist bone with natural drape following "
            "gravity. It should have slight looseness and follow the wrist angle."
        ),
        JewelryType.ANKLET: (
            "Place the anklet above the ankle bone with the delicate chain draping "
            "naturally. Size it proportionally to the ankle width."
        ),
        JewelryType.SET: (
            "Place all jewelry pieces: earrings at earlobes symmetrically, necklace in "
            "neck hollow with centered pendant. Ensure all pieces are coordinated in "
            "style."
        ),
    }
)

NEGATIVE_CONSTRAINTS = (
    "Avoid: cartoon, illustration, face deformity, bad anatomy, extra fingers, "
    "floating jewelry, unrealistic placement, blur, low quality, watermark, text."
)


def coerce_jewelry_type(value: str | None) -> JewelryType:
    """Map a free jewelry type onto the known set, ``set`` for anything else."""

    if value:
        try:
            return JewelryType(value.strip().lower())
        except ValueError:
            pass
    return JewelryType.SET


def placement_instructions(jewelry_type: str | None) -> str:
    return PLACEMENT_INSTRUCTIONS[coerce_jewelry_type(jewelry_type)]


def build_tryon_prompt(jewelry_type: str | None) -> str:
    """Prompt for placing the jewelry of image 2 on the person of image 1."""

    kind = coerce_jewelry_type(jewelry_type)
    return (
        "Photorealistic edit. Image 1 is a photo of a person (the model). "
        f"Image 2 is a photo of a piece of jewelry ({kind.value}). "
        f"Show the person from image 1 wearing the {kind.value} from image 2, keeping "
        "their face, pose, clothing, background and lighting unchanged and reproducing "
        "the jewelry's material, stones, color and shape faithfully. "
        f"Placement: {PLACEMENT_INSTRUCTIONS[kind]} "
        "Cinematic lighting, highly detailed texture. "
        f"{NEGATIVE_CONSTRAINTS}"
    )


def build_adjust_prompt(
    jewelry_type: str | None,
    adjustment_type: str | None,
    params: Mapping[str, Any] | None = None,
) -> str:
    """Prompt for refining an existing try-on image."""

    kind = coerce_jewelry_type(jewelry_type)
    adjustment = (adjustment_type or "").strip() or "general refinement"
    details = ", ".join(f"{key}: {value}" for key, value in (params or {}).items())
    prompt = (
        f"Photorealistic edit of a person wearing a {kind.value}. "
        f"Adjust the {kind.value} ({adjustment})"
    )
    if details:
        prompt += f" with these settings: {details}"
    return (
        f"{prompt}. Keep the person, pose, clothing and background unchanged. "
        f"Placement rules: {PLACEMENT_INSTRUCTIONS[kind]} "
        f"{NEGATIVE_CONSTRAINTS}"
    )


__all__ = [
    "JewelryType",
    "NEGATIVE_CONSTRAINTS",
    "PLACEMENT_INSTRUCTIONS",
    "build_adjust_prompt",
    "build_tryon_prompt",
    "coerce_jewelry_type",
    "placement_instructions",
]
