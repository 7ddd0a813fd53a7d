"""Pydantic schemas for the try-on function endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..providers.categories import GarmentCategory
from ..providers.provider_errors import InvalidRequestError
from ..providers.providers_fashn import GarmentTryOnRequest
from ..providers.providers_kie import JewelryAction, JewelryTryOnRequest

IMAGE_MIN_LENGTH = 10


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())


class GarmentTryOnBody(_CamelModel):
    model_base64: str = Field(..., alias="modelBase64", min_length=IMAGE_MIN_LENGTH)
    garment_base64: str = Field(..., alias="garmentBase64", min_length=IMAGE_MIN_LENGTH)
    clothing_type: str | None = Field(default=None, alias="clothingType")
    category: Literal["auto", "tops", "bottoms", "one-pieces"] = "auto"
    mode: Literal["performance", "balanced", "quality"] = "balanced"
    garment_photo_type: Literal["auto", "flat-lay", "model"] = Field(
        default="auto", alias="garmentPhotoType"
    )
    moderation_level: Literal["conservative", "permissive", "none"] = Field(
        default="permissive", alias="moderationLevel"
    )

    def to_request(self) -> GarmentTryOnRequest:
        return GarmentTryOnRequest(
            model_image=self.model_base64,
            garment_image=self.garment_base64,
            category=GarmentCategory(self.category),
            clothing_type=self.clothing_type,
            mode=self.mode,
            garment_photo_type=self.garment_photo_type,
            moderation_level=self.moderation_level,
        )


class JewelryTryOnBody(_CamelModel):
    action: str = "tryOn"
    model_image: str | None = Field(default=None, alias="modelImage")
    jewelry_image: str | None = Field(default=None, alias="jewelryImage")
    jewelry_type: str | None = Field(default=None, alias="jewelryType")
    adjustment_type: str | None = Field(default=None, alias="adjustmentType")
    params: dict[str, Any] | None = None

    def to_request(self) -> JewelryTryOnRequest:
        try:
            action = JewelryAction(self.action)
        except ValueError:
            raise InvalidRequestError("Invalid action") from None
        if action is JewelryAction.TRY_ON and not (self.model_image and self.jewelry_image):
            raise InvalidRequestError("modelImage and jewelryImage are required")
        if action is JewelryAction.ADJUST and not self.model_image:
            raise InvalidRequestError("modelImage is required")
        return JewelryTryOnRequest(
            action=action,
            model_image=self.model_image,
            jewelry_image=self.jewelry_image,
            jewelry_type=self.jewelry_type,
            adjustment_type=self.adjustment_type,
            params=dict(self.params or {}),
        )


class GarmentTryOnResponse(_CamelModel):
    output_url: str = Field(..., alias="outputUrl")
    prediction_id: str = Field(..., alias="predictionId")


class JewelryTryOnResponse(_CamelModel):
    output_url: str = Field(..., alias="outputUrl")
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


def parse_body(model: type[_CamelModel], raw: bytes) -> Any:
    """Validate a raw JSON body, mapping every failure to a 400."""

    try:
        return model.model_validate_json(raw or b"{}")
    except ValidationError as exc:
        raise InvalidRequestError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request body"


__all__ = [
    "ErrorResponse",
    "GarmentTryOnBody",
    "GarmentTryOnResponse",
    "JewelryTryOnBody",
    "JewelryTryOnResponse",
    "parse_body",
]
