"""Recipe recommendation orchestration across providers and the fallback catalog."""

import logging
from dataclasses import dataclass, field
from typing import TypeVar

from meal_planner.domain.errors import InputValidationError
from meal_planner.domain.models import RecipeDraft
from meal_planner.domain.recipes import (
    Diet,
    MealType,
    Preferences,
    Provenance,
    RecommendationRequest,
    RecommendationResult,
)
from meal_planner.services.fallback import fallback_recipes
from meal_planner.services.normalization import normalize_recipes
from meal_planner.services.providers import ProviderSlot, call_with_timeout
from meal_planner.services.recipes import RecipeRepository

_logger = logging.getLogger(__name__)

E = TypeVar("E", Diet, MealType)


def build_request(
    ingredients: list[str], diet: str | None = None, meal_type: str | None = None
) -> RecommendationRequest:
    """Validate raw recommendation input.

    Blank ingredient entries are dropped; an empty result is rejected. Missing
    preferences default to ``none`` / ``any``, unknown values are rejected.
    """
    cleaned = [item.strip() for item in ingredients if item and item.strip()]
    if not cleaned:
        raise InputValidationError("At least one ingredient is required")
    return RecommendationRequest(
        ingredients=cleaned,
        preferences=Preferences(
            diet=_parse_enum(Diet, diet, Diet.NONE, "diet"),
            meal_type=_parse_enum(MealType, meal_type, MealType.ANY, "mealType"),
        ),
    )


def _parse_enum(
    enum_type: type[E], value: str | None, default: E, field_name: str
) -> E:
    if value is None or not value.strip():
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise InputValidationError(
            f"Invalid {field_name} '{value}'. Expected one of: {allowed}"
        ) from None


@dataclass
class RecommendationService:
    """Try providers in order, fall back to the static catalog, persist the winner.

    Each provider is called at most once per request. Provider failures, timeouts
    and malformed responses advance to the next stage; only invalid input is
    ever raised to the caller.
    """

    repository: RecipeRepository
    providers: list[ProviderSlot] = field(default_factory=list)
    timeout_seconds: float = 20.0

    async def recommend(self, request: RecommendationRequest) -> RecommendationResult:
        """Return persisted recipes and the stage that produced them."""
        drafts, stage = await self._first_success(request)
        recipes = [self.repository.add_recipe(draft) for draft in drafts]
        _logger.info(
            "Recipe recommendations served: provider=%s count=%s",
            stage.value,
            len(recipes),
        )
        return RecommendationResult(recipes=recipes, provider=stage)

    async def _first_success(
        self, request: RecommendationRequest
    ) -> tuple[list[RecipeDraft], Provenance]:
        for slot in self.providers:
            try:
                raw = await call_with_timeout(
                    slot.provider.recommend_recipes(
                        request.ingredients, request.preferences
                    ),
                    self.timeout_seconds,
                )
                drafts = normalize_recipes(slot.provider.name, raw, request.ingredients)
            except TimeoutError:
                _logger.warning(
                    "Recipe provider timed out: stage=%s provider=%s",
                    slot.stage.value,
                    slot.provider.name,
                )
                continue
            except Exception as exc:
                _logger.warning(
                    "Recipe provider failed: stage=%s provider=%s error=%s: %s",
                    slot.stage.value,
                    slot.provider.name,
                    type(exc).__name__,
                    exc,
                )
                continue
            return drafts, slot.stage

        _logger.info(
            "Using fallback recipes: meal_type=%s", request.preferences.meal_type.value
        )
        return fallback_recipes(request.preferences.meal_type), Provenance.FALLBACK
