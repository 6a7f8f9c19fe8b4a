"""Recipe nutritional analysis with a static fallback."""

import logging
from dataclasses import dataclass, field

from meal_planner.domain.errors import InputValidationError
from meal_planner.services.fallback import fallback_analysis
from meal_planner.services.providers import ProviderSlot, call_with_timeout

_logger = logging.getLogger(__name__)


@dataclass
class RecipeAnalysisService:
    """Ask providers for a nutritional analysis, falling back to a fixed estimate."""

    providers: list[ProviderSlot] = field(default_factory=list)
    timeout_seconds: float = 20.0

    async def analyze(self, title: str, ingredients: list[str]) -> dict[str, object]:
        """Return the first provider analysis, or the static one."""
        if not title or not title.strip():
            raise InputValidationError("Recipe title is required")
        names = [item.strip() for item in ingredients if item and item.strip()]
        for slot in self.providers:
            try:
                analysis = await call_with_timeout(
                    slot.provider.analyze_recipe(title.strip(), names),
                    self.timeout_seconds,
                )
            except Exception as exc:
                _logger.warning(
                    "Recipe analysis failed: provider=%s error=%s",
                    slot.provider.name,
                    type(exc).__name__,
                )
                continue
            if isinstance(analysis, dict) and analysis:
                return analysis
            _logger.warning(
                "Recipe analysis returned no data: provider=%s", slot.provider.name
            )
        _logger.info("Using fallback recipe analysis: title=%s", title)
        return fallback_analysis(names)
