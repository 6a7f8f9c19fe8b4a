"""Image-to-ingredient scan pipeline."""

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from meal_planner.domain.errors import ImageProcessingError, InputValidationError
from meal_planner.domain.vision import ImageLabel, ScanResult, is_viable_image_payload
from meal_planner.services.ingredients import IngredientRepository
from meal_planner.services.providers import ProviderSlot, call_with_timeout

CONFIDENCE_THRESHOLD = 0.7

_logger = logging.getLogger(__name__)


@dataclass
class IngredientScanService:
    """Detect ingredients in an image and add the confident ones to the pantry."""

    repository: IngredientRepository
    providers: list[ProviderSlot] = field(default_factory=list)
    timeout_seconds: float = 20.0

    async def scan(self, owner_id: int, image_data: str | None) -> ScanResult:
        """Run the vision provider and persist labels above the threshold."""
        if not is_viable_image_payload(image_data):
            raise InputValidationError("A valid base64 image is required")
        if not self.providers:
            _logger.warning("Image scan requested but no vision provider is configured")
            raise ImageProcessingError("No vision provider configured")

        slot = self.providers[0]
        try:
            raw = await call_with_timeout(
                slot.provider.analyze_image(image_data), self.timeout_seconds
            )
            labels = [ImageLabel.model_validate(item) for item in raw]
        except (TimeoutError, ValidationError) as exc:
            _logger.warning(
                "Image scan failed: provider=%s error=%s",
                slot.provider.name,
                type(exc).__name__,
            )
            raise ImageProcessingError(str(exc)) from exc
        except Exception as exc:
            _logger.exception("Image scan failed: provider=%s", slot.provider.name)
            raise ImageProcessingError(str(exc)) from exc

        accepted = accept_labels(labels)
        added = [self.repository.add_ingredient(owner_id, label) for label in accepted]
        _logger.info(
            "Image scan complete: provider=%s detected=%s accepted=%s",
            slot.stage.value,
            len(labels),
            len(accepted),
        )
        return ScanResult(labels=accepted, added=added, provider=slot.stage)


def accept_labels(labels: list[ImageLabel]) -> list[str]:
    """Return trimmed label names with confidence strictly above the threshold."""
    return [
        item.label.strip()
        for item in labels
        if item.confidence > CONFIDENCE_THRESHOLD and item.label.strip()
    ]
