"""Static recipes and analysis used when every provider fails."""

from meal_planner.domain.models import RecipeDraft
from meal_planner.domain.recipes import MealType

FALLBACK_RECIPES: tuple[RecipeDraft, ...] = (
    RecipeDraft(
        title="Chicken Stir-Fry with Rice and Vegetables",
        description=(
            "A quick and easy stir-fry using chicken, rice, and fresh vegetables."
        ),
        instructions=(
            "1. Cook rice according to package instructions.\n"
            "2. Dice chicken into 1-inch cubes.\n"
            "3. Heat olive oil in a large pan or wok over medium-high heat.\n"
            "4. Add chicken and cook until no longer pink, about 5-7 minutes.\n"
            "5. Add diced bell peppers, onions, and minced garlic.\n"
            "6. Cook for 3-4 minutes until vegetables begin to soften.\n"
            "7. Add broccoli and cook for another 3 minutes.\n"
            "8. Season with salt, pepper, and your favorite stir-fry sauce.\n"
            "9. Serve hot over cooked rice."
        ),
        image_url="",
        prep_time_minutes=30,
        calories=450,
        meal_type=MealType.DINNER.value,
        ingredients=[
            "Chicken",
            "Rice",
            "Broccoli",
            "Bell pepper",
            "Onion",
            "Garlic",
            "Olive oil",
        ],
    ),
    RecipeDraft(
        title="Mediterranean Rice Bowl",
        description=(
            "A flavorful bowl combining rice, vegetables, and herbs for a healthy meal."
        ),
        instructions=(
            "1. Cook rice until fluffy and set aside.\n"
            "2. Saute diced bell peppers, onions, and garlic in olive oil until soft.\n"
            "3. Season with salt, pepper, oregano, and a pinch of red pepper flakes.\n"
            "4. Add diced vegetables of your choice (broccoli works well).\n"
            "5. Cook for 5 more minutes until all vegetables are tender.\n"
            "6. Serve the vegetable mixture over rice.\n"
            "7. Drizzle with additional olive oil and lemon juice if available."
        ),
        image_url="",
        prep_time_minutes=25,
        calories=380,
        meal_type=MealType.LUNCH.value,
        ingredients=["Rice", "Bell pepper", "Onion", "Garlic", "Olive oil", "Oregano"],
    ),
    RecipeDraft(
        title="Garlic Chicken with Roasted Vegetables",
        description=(
            "Tender garlic chicken served with a medley of oven-roasted vegetables."
        ),
        instructions=(
            "1. Preheat oven to 425F (220C).\n"
            "2. Season chicken pieces with salt, pepper, and minced garlic.\n"
            "3. Cut bell peppers, onions, and broccoli into even-sized pieces.\n"
            "4. Toss vegetables with olive oil, salt, and pepper.\n"
            "5. Place chicken and vegetables on a baking sheet.\n"
            "6. Roast for 25-30 minutes, turning once halfway through.\n"
            "7. Check that chicken reaches 165F (74C) internal temperature.\n"
            "8. Serve chicken with roasted vegetables and cooked rice."
        ),
        image_url="",
        prep_time_minutes=40,
        calories=410,
        meal_type=MealType.DINNER.value,
        ingredients=["Chicken", "Garlic", "Broccoli", "Bell pepper", "Onion"],
    ),
    RecipeDraft(
        title="Garden Vegetable Omelette",
        description="A fluffy omelette filled with sauteed vegetables and herbs.",
        instructions=(
            "1. Whisk eggs with a pinch of salt and pepper.\n"
            "2. Saute diced onion, bell pepper, and broccoli in olive oil.\n"
            "3. Pour the eggs over the vegetables and cook on low heat.\n"
            "4. Fold the omelette once the edges set and serve warm."
        ),
        image_url="",
        prep_time_minutes=15,
        calories=320,
        meal_type=MealType.BREAKFAST.value,
        ingredients=["Eggs", "Onion", "Bell pepper", "Broccoli", "Olive oil"],
    ),
)


def fallback_recipes(meal_type: MealType) -> list[RecipeDraft]:
    """Return catalog recipes for a meal type, never an empty list."""
    if meal_type is MealType.ANY:
        return list(FALLBACK_RECIPES)
    matches = [recipe for recipe in FALLBACK_RECIPES if recipe.meal_type == meal_type]
    if matches:
        return matches
    first = FALLBACK_RECIPES[0]
    return [
        RecipeDraft(
            title=first.title,
            description=first.description,
            instructions=first.instructions,
            image_url=first.image_url,
            prep_time_minutes=first.prep_time_minutes,
            calories=first.calories,
            meal_type=meal_type.value,
            ingredients=list(first.ingredients),
        )
    ]


_MEAT_KEYWORDS = ("meat", "chicken", "beef", "pork", "fish")
_ANIMAL_PRODUCT_KEYWORDS = (*_MEAT_KEYWORDS, "milk", "cheese", "egg")
_GLUTEN_KEYWORDS = ("wheat", "flour", "bread", "pasta")


def fallback_analysis(ingredients: list[str]) -> dict[str, object]:
    """Return a generic nutritional analysis for a recipe."""
    lowered = [ingredient.lower() for ingredient in ingredients]
    return {
        "nutritionalInfo": {
            "calories": 450,
            "protein": 35,
            "carbs": 45,
            "fat": 15,
            "fiber": 8,
            "sodium": 500,
            "vitamins": [
                {"name": "Vitamin A", "amount": "15% DV"},
                {"name": "Vitamin C", "amount": "30% DV"},
                {"name": "Vitamin D", "amount": "0% DV"},
                {"name": "Vitamin E", "amount": "10% DV"},
            ],
            "minerals": [
                {"name": "Iron", "amount": "15% DV"},
                {"name": "Calcium", "amount": "10% DV"},
                {"name": "Potassium", "amount": "20% DV"},
                {"name": "Magnesium", "amount": "12% DV"},
            ],
        },
        "allergens": [
            "This recipe may contain common allergens depending on exact "
            "ingredients used."
        ],
        "dietaryConsiderations": {
            "isVegetarian": not _mentions_any(lowered, _MEAT_KEYWORDS),
            "isVegan": not _mentions_any(lowered, _ANIMAL_PRODUCT_KEYWORDS),
            "isGlutenFree": not _mentions_any(lowered, _GLUTEN_KEYWORDS),
            "notes": (
                "This is an estimated analysis. For precise nutritional "
                "information, consult with a registered dietitian."
            ),
        },
    }


def _mentions_any(values: list[str], keywords: tuple[str, ...]) -> bool:
    return any(keyword in value for value in values for keyword in keywords)
