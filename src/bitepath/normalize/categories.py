"""Keyword-based grocery aisle categorization."""

PRODUCE = "Produce"
MEAT_POULTRY = "Meat & Poultry"
DAIRY_EGGS = "Dairy & Eggs"
PANTRY = "Pantry"
FROZEN = "Frozen"
BEVERAGES = "Beverages"
OTHER = "Other"

# Checked in order; the first category with a keyword inside the name wins.
# "apple juice" lands in Produce because "apple" is checked before "juice".
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        PRODUCE,
        (
            "apple",
            "avocado",
            "banana",
            "basil",
            "bean sprout",
            "bell pepper",
            "berries",
            "berry",
            "broccoli",
            "cabbage",
            "carrot",
            "cauliflower",
            "celery",
            "cilantro",
            "coriander",
            "cucumber",
            "eggplant",
            "garlic",
            "ginger",
            "grape",
            "kale",
            "leek",
            "lemon",
            "lettuce",
            "lime",
            "mango",
            "melon",
            "mint",
            "mushroom",
            "onion",
            "orange",
            "parsley",
            "peach",
            "pear",
            "potato",
            "scallion",
            "shallot",
            "spinach",
            "squash",
            "thyme",
            "tomato",
            "zucchini",
        ),
    ),
    (
        MEAT_POULTRY,
        (
            "bacon",
            "beef",
            "chicken",
            "chorizo",
            "duck",
            "fish",
            "ham",
            "lamb",
            "mince",
            "pancetta",
            "pork",
            "prawn",
            "salmon",
            "sausage",
            "shrimp",
            "steak",
            "tuna",
            "turkey",
        ),
    ),
    (
        DAIRY_EGGS,
        (
            "butter",
            "cheddar",
            "cheese",
            "cream",
            "egg",
            "feta",
            "milk",
            "mozzarella",
            "parmesan",
            "ricotta",
            "yogurt",
            "yoghurt",
        ),
    ),
    (
        PANTRY,
        (
            "baking powder",
            "baking soda",
            "bread",
            "broth",
            "cinnamon",
            "cumin",
            "flour",
            "honey",
            "ketchup",
            "lentil",
            "mustard",
            "noodle",
            "oats",
            "oil",
            "paprika",
            "pasta",
            "pepper",
            "rice",
            "salt",
            "sauce",
            "spaghetti",
            "stock",
            "sugar",
            "vinegar",
        ),
    ),
    (
        FROZEN,
        (
            "frozen",
            "ice cube",
            "popsicle",
            "sorbet",
        ),
    ),
    (
        BEVERAGES,
        (
            "beer",
            "coffee",
            "juice",
            "soda",
            "tea",
            "water",
            "wine",
        ),
    ),
)

CATEGORY_ORDER: tuple[str, ...] = tuple(name for name, _ in CATEGORY_KEYWORDS) + (OTHER,)


def categorize(ingredient_name: str) -> str:
    """Assign an ingredient to the first category with a matching keyword."""
    name = ingredient_name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return OTHER
