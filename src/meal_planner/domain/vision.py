"""Models for image scan results."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from meal_planner.domain.models import Ingredient
from meal_planner.domain.recipes import Provenance

MIN_IMAGE_PAYLOAD_LENGTH = 100


class ImageLabel(BaseModel):
    """Single ingredient label detected in an image."""

    label: str
    confidence: float = Field(ge=0.0, le=1.0)


@dataclass(frozen=True)
class ScanResult:
    """Accepted labels and the ingredients created from them."""

    labels: list[str]
    added: list[Ingredient]
    provider: Provenance


def strip_data_url(image_data: str) -> str:
    """Return the base64 body of an image payload, dropping any data URL prefix."""
    if "base64," in image_data:
        return image_data.split("base64,", maxsplit=1)[1].strip()
    return image_data.strip()


def is_viable_image_payload(image_data: str | None) -> bool:
    """Return True when the payload is present and long enough to be an image."""
    if not image_data:
        return False
    return len(strip_data_url(image_data)) >= MIN_IMAGE_PAYLOAD_LENGTH


def to_data_url(image_data: str) -> str:
    """Return the payload as a data URL suitable for vision model input."""
    if image_data.startswith("data:"):
        return image_data
    return f"data:{_detect_mime_type(image_data)};base64,{image_data}"


def _detect_mime_type(encoded: str) -> str:
    """Infer a basic image MIME type from the base64 signature prefix."""
    if encoded.startswith("iVBORw0KGgo"):
        return "image/png"
    if encoded.startswith("UklGR"):
        return "image/webp"
    return "image/jpeg"
