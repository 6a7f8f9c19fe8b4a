"""Normalize provider recipe payloads into recipe drafts."""

from collections.abc import Mapping

from meal_planner.domain.errors import ProviderShapeError
from meal_planner.domain.models import RecipeDraft
from meal_planner.domain.recipes import MealType

DEFAULT_PREP_TIME_MINUTES = 30
DEFAULT_CALORIES = 300

_PREP_TIME_KEYS = ("prepTimeMinutes", "prepTime", "prep_time_minutes", "prep_time")
_IMAGE_URL_KEYS = ("imageUrl", "image_url")
_MEAL_TYPE_KEYS = ("mealType", "meal_type")


def normalize_recipes(
    provider: str, raw: object, request_ingredients: list[str]
) -> list[RecipeDraft]:
    """Validate a raw recipe list and map it to drafts with defaults applied.

    The whole list is rejected with ProviderShapeError when it is not a
    non-empty list, or when any element lacks a title or carries a non-list
    ingredients field.
    """
    if not isinstance(raw, list) or not raw:
        raise ProviderShapeError(provider, "expected a non-empty recipe list")
    return [_normalize_one(provider, item, request_ingredients) for item in raw]


def _normalize_one(
    provider: str, item: object, request_ingredients: list[str]
) -> RecipeDraft:
    if not isinstance(item, Mapping):
        raise ProviderShapeError(provider, "recipe entry is not an object")
    title = item.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ProviderShapeError(provider, "recipe entry has no title")
    ingredients = item.get("ingredients")
    if ingredients is not None and not isinstance(ingredients, list):
        raise ProviderShapeError(provider, "recipe ingredients is not a list")

    names = _clean_names(ingredients or [])
    return RecipeDraft(
        title=title.strip(),
        description=_text(item.get("description")),
        instructions=_instructions(item.get("instructions")),
        image_url=_text(_first(item, _IMAGE_URL_KEYS)),
        prep_time_minutes=_positive_int(
            _first(item, _PREP_TIME_KEYS), DEFAULT_PREP_TIME_MINUTES
        ),
        calories=_positive_int(item.get("calories"), DEFAULT_CALORIES),
        meal_type=_meal_type(_first(item, _MEAL_TYPE_KEYS)),
        ingredients=names or list(request_ingredients),
    )


def _first(item: Mapping, keys: tuple[str, ...]) -> object:
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _instructions(value: object) -> str:
    """Join step lists into newline-separated text."""
    if isinstance(value, list):
        return "\n".join(str(step).strip() for step in value if str(step).strip())
    return _text(value)


def _clean_names(values: list[object]) -> list[str]:
    names = []
    for value in values:
        if isinstance(value, Mapping):
            value = value.get("name")
        text = _text(value)
        if text:
            names.append(text)
    return names


def _positive_int(value: object, default: int) -> int:
    """Parse an int-like value; anything unusable or below 1 yields the default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().split(" ", maxsplit=1)[0]
    elif not isinstance(value, int | float):
        return default
    try:
        parsed = int(float(value))
    except (ValueError, OverflowError):
        return default
    return parsed if parsed >= 1 else default


def _meal_type(value: object) -> str:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {meal_type.value for meal_type in MealType}:
            return lowered
    return MealType.ANY.value
