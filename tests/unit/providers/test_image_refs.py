from __future__ import annotations

import pytest

from src.tryon.providers.image_refs import (
    ImageRefKind,
    classify_image_reference,
    describe_image_reference,
    normalize_image_reference,
)

pytestmark = pytest.mark.unit


def test_urls_pass_through_unchanged() -> None:
    assert normalize_image_reference("http://cdn/x.png") == "http://cdn/x.png"
    assert normalize_image_reference("https://cdn/x.png") == "https://cdn/x.png"


def test_data_uris_pass_through_unchanged() -> None:
    value = "data:image/png;base64,iVBORw0KGgo="
    assert normalize_image_reference(value) == value


def test_raw_base64_gets_jpeg_data_uri_prefix() -> None:
    assert normalize_image_reference("/9j/4AAQSkZJRg") == "data:image/jpeg;base64,/9j/4AAQSkZJRg"


def test_malformed_base64_is_not_validated() -> None:
    assert normalize_image_reference("not base64 at all!") == (
        "data:image/jpeg;base64,not base64 at all!"
    )


@pytest.mark.parametrize(
    "value",
    ["/9j/abc", "http://cdn/x.png", "data:image/webp;base64,UklGR", ""],
)
def test_normalization_is_idempotent(value: str) -> None:
    once = normalize_image_reference(value)
    assert normalize_image_reference(once) == once


def test_classification_and_log_summary() -> None:
    assert classify_image_reference("https://a") is ImageRefKind.URL
    assert classify_image_reference("data:x") is ImageRefKind.DATA_URI
    assert classify_image_reference("abc") is ImageRefKind.BASE64
    assert describe_image_reference("abc") == {"kind": "base64", "length": 3}
