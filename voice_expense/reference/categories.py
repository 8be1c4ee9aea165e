"""
Category Reference Table

Ordered keyword rules for classifying a transcript.

DESIGN DECISION: First match wins, in table order. A transcript that
mentions both "restaurant" and "taxi" is Food & Dining because that rule
comes first. This keeps classification explainable and testable.

Keywords are matched as whole words or phrases, so "eat" does not fire
on "great" and "park" does not fire on "parking".
"""

from pydantic import BaseModel, ConfigDict

from voice_expense.models.expense import CategoryTag


class CategoryRule(BaseModel):
    """One row of the category table."""
    model_config = ConfigDict(frozen=True)

    category: CategoryTag
    keywords: tuple[str, ...] = ()


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        category=CategoryTag.FOOD_DINING,
        keywords=(
            "food", "tea", "coffee", "lunch", "dinner", "breakfast", "restaurant",
            "meal", "drink", "drinks", "cafe", "dining", "eat", "ate", "snack", "brunch",
            "takeout", "takeaway", "delivery", "pizza", "burger", "sandwich",
            "sushi", "dessert", "ice cream", "bakery", "starbucks", "mcdonald",
            "mcdonalds",
        ),
    ),
    CategoryRule(
        category=CategoryTag.GROCERY,
        keywords=(
            "grocery", "groceries", "supermarket", "market", "food shopping",
            "vegetables", "fruits", "produce", "walmart", "carrefour", "lulu",
        ),
    ),
    CategoryRule(
        category=CategoryTag.TRANSPORTATION,
        keywords=(
            "gas", "fuel", "taxi", "uber", "transport", "transportation", "parking",
            "petrol", "toll", "careem", "lyft", "metro", "subway", "train", "bus",
            "diesel", "gas station", "petrol station", "refuel", "fill up",
            "car wash", "car rental", "car service", "vehicle", "ride",
            "trip", "travel", "flight", "airline", "ticket",
        ),
    ),
    CategoryRule(
        category=CategoryTag.SHOPPING,
        keywords=(
            "shopping", "clothes", "clothing", "store", "mall", "purchase", "buy", "bought",
            "shoes", "accessories", "fashion", "retail", "amazon", "online shopping",
            "electronics", "gadget", "phone", "laptop",
        ),
    ),
    CategoryRule(
        category=CategoryTag.ENTERTAINMENT,
        keywords=(
            "movie", "movies", "cinema", "concert", "entertainment", "fun", "games", "theatre",
            "sports", "gym", "fitness", "netflix", "streaming", "spotify", "music",
            "hobby", "recreation", "amusement", "park",
        ),
    ),
    CategoryRule(
        category=CategoryTag.BILLS_UTILITIES,
        keywords=(
            "bill", "bills", "rent", "utility", "utilities", "electricity", "water",
            "internet", "phone bill", "subscription", "insurance", "mortgage", "loan",
            "payment", "recurring", "monthly", "annual",
        ),
    ),
    CategoryRule(
        category=CategoryTag.HEALTHCARE,
        keywords=(
            "healthcare", "health", "doctor", "hospital", "medicine", "medical",
            "pharmacy", "clinic", "prescription", "dentist", "therapy", "checkup",
            "emergency", "surgery", "treatment",
        ),
    ),
    CategoryRule(
        category=CategoryTag.EDUCATION,
        keywords=(
            "education", "school", "course", "training", "books", "learning", "tuition",
            "college", "university", "class", "workshop", "seminar", "certification",
            "textbook", "supplies", "fees",
        ),
    ),
    # Catch-all, never matched by keyword
    CategoryRule(category=CategoryTag.OTHER),
)


def all_category_keywords() -> frozenset[str]:
    """Every keyword in the table, used to trim merchant spans."""
    return frozenset(kw for rule in CATEGORY_RULES for kw in rule.keywords)
