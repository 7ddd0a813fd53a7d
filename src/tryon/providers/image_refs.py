"""Image reference normalisation for provider payloads."""

from __future__ import annotations

from enum import StrEnum

DATA_URI_JPEG_PREFIX = "data:image/jpeg;base64,"


class ImageRefKind(StrEnum):
    URL = "url"
    DATA_URI = "data-uri"
    BASE64 = "base64"


def classify_image_reference(value: str) -> ImageRefKind:
    if value.startswith("http"):
        return ImageRefKind.URL
    if value.startswith("data:"):
        return ImageRefKind.DATA_URI
    return ImageRefKind.BASE64


def normalize_image_reference(value: str) -> str:
    """Return ``value`` in a form providers accept as an image reference.

    URLs and data URIs pass through untouched; anything else is treated as
    raw base64 JPEG content. The base64 itself is not validated, so a
    malformed payload surfaces later as a provider error. Applying the
    function to its own output is a no-op.
    """

    if classify_image_reference(value) is ImageRefKind.BASE64:
        return f"{DATA_URI_JPEG_PREFIX}{value}"
    return value


def describe_image_reference(value: str) -> dict[str, object]:
    """Log-safe summary of an image reference (never the payload itself)."""

    return {"kind": classify_image_reference(value).value, "length": len(value)}


__all__ = [
    "DATA_URI_JPEG_PREFIX",
    "ImageRefKind",
    "classify_image_reference",
    "describe_image_reference",
    "normalize_image_reference",
]
