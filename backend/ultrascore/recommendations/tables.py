"""
Static recommendation tables. Entry order is significant: every search is a
first-match-wins linear scan, so order decides ties.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class AddonCandidate:
    name: str
    description: str
    boost: int
    applicable_to: tuple[str, ...]  # food-category keywords


@dataclass(frozen=True)
class AlternativeCandidate:
    triggers: tuple[str, ...]  # lowercase substrings of the product name
    alternative: str
    description: str
    estimated_score: int
    min_score_gap: int


@dataclass(frozen=True)
class PairingCandidate:
    triggers: tuple[str, ...]
    pairing: str
    reason: str
    boost: int


# ---------------------------------------------------------------------------
# Add-ons by nutritional gap
# ---------------------------------------------------------------------------
ADDON_RECOMMENDATIONS: Mapping[str, tuple[AddonCandidate, ...]] = MappingProxyType({
    "low_fiber": (
        AddonCandidate("Chia Seeds", "Add 1 tbsp for +5g fiber and omega-3", 8,
                       ("yogurt", "oatmeal", "smoothie", "cereal", "salad")),
        AddonCandidate("Ground Flaxseed", "Add 2 tbsp for fiber and lignans", 6,
                       ("yogurt", "oatmeal", "smoothie", "baking")),
        AddonCandidate("Fresh Berries", "Add 1/2 cup for fiber and antioxidants", 7,
                       ("yogurt", "oatmeal", "cereal", "pancakes")),
        AddonCandidate("Sliced Almonds", "Add 1oz for fiber, protein and healthy fats", 5,
                       ("yogurt", "oatmeal", "salad", "cereal")),
    ),
    "low_protein": (
        AddonCandidate("Greek Yogurt", "Add 1/2 cup for +10g protein", 8,
                       ("smoothie", "fruit", "granola")),
        AddonCandidate("Hemp Seeds", "Add 2 tbsp for +6g complete protein", 6,
                       ("yogurt", "oatmeal", "salad", "smoothie")),
        AddonCandidate("Nut Butter", "Add 2 tbsp for protein and healthy fats", 5,
                       ("toast", "oatmeal", "smoothie", "fruit")),
        AddonCandidate("Cottage Cheese", "Add 1/2 cup for +14g protein", 9,
                       ("fruit", "toast", "salad")),
    ),
    "low_omega3": (
        AddonCandidate("Walnuts", "Add 1oz for ALA omega-3", 6,
                       ("yogurt", "oatmeal", "salad", "cereal")),
        AddonCandidate("Chia Seeds", "Add 1 tbsp for omega-3 and fiber", 7,
                       ("yogurt", "oatmeal", "smoothie")),
        AddonCandidate("Ground Flaxseed", "Add 2 tbsp for ALA omega-3", 6,
                       ("yogurt", "oatmeal", "smoothie", "baking")),
    ),
    "high_sugar": (
        AddonCandidate("Cinnamon", "Add 1 tsp to help balance blood sugar response", 2,
                       ("oatmeal", "yogurt", "coffee", "smoothie")),
        AddonCandidate("Nuts or Seeds", "Add protein/fat to slow sugar absorption", 4,
                       ("fruit", "juice", "cereal", "dessert")),
    ),
    # Not produced by detect_gaps
    "low_antioxidants": (
        AddonCandidate("Fresh Berries", "Add for anthocyanins and vitamin C", 6,
                       ("yogurt", "oatmeal", "cereal", "smoothie")),
        AddonCandidate("Cacao Nibs", "Add 1 tbsp for flavanols", 4,
                       ("yogurt", "oatmeal", "smoothie")),
        AddonCandidate("Matcha Powder", "Add 1 tsp for EGCG and L-theanine", 5,
                       ("smoothie", "yogurt", "latte")),
    ),
    "needs_fermented": (
        AddonCandidate("Sauerkraut", "Add 2 tbsp for probiotics", 5,
                       ("sandwich", "salad", "bowl", "meat")),
        AddonCandidate("Kimchi", "Add for probiotics and flavor", 6,
                       ("rice", "bowl", "eggs", "noodles")),
        AddonCandidate("Miso Paste", "Add to dressings or soups", 4,
                       ("soup", "dressing", "marinade")),
    ),
})

GAP_REASONS: Mapping[str, str] = MappingProxyType({
    "low_fiber": "Boost fiber content",
    "low_protein": "Add protein",
    "low_omega3": "Add omega-3 fatty acids",
    "high_sugar": "Balance blood sugar impact",
    "low_antioxidants": "Add antioxidants",
    "needs_fermented": "Add probiotic benefits",
})
DEFAULT_GAP_REASON = "Improve nutrition"

# Category keyword -> product-name keywords that imply it
FOOD_CATEGORY_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "yogurt": ("yogurt", "yoghurt", "greek", "skyr"),
    "oatmeal": ("oatmeal", "oat", "porridge", "muesli"),
    "smoothie": ("smoothie", "shake", "blend"),
    "cereal": ("cereal", "granola", "flakes", "crunch"),
    "salad": ("salad", "slaw", "greens"),
    "toast": ("toast", "bread", "bagel"),
    "fruit": ("fruit", "apple", "banana", "berry", "orange"),
    "soup": ("soup", "broth", "stew"),
    "bowl": ("bowl", "buddha", "grain bowl", "poke"),
    "rice": ("rice", "pilaf", "risotto"),
    "sandwich": ("sandwich", "sub", "wrap", "burger"),
    "meat": ("chicken", "beef", "pork", "steak", "meat"),
    "eggs": ("egg", "omelette", "scramble"),
    "noodles": ("noodle", "pasta", "spaghetti", "ramen"),
})

# ---------------------------------------------------------------------------
# Category alternatives
# ---------------------------------------------------------------------------
CATEGORY_ALTERNATIVES: Mapping[str, tuple[AlternativeCandidate, ...]] = MappingProxyType({
    "beverages": (
        AlternativeCandidate(("soda", "cola", "sprite", "fanta", "pepsi"), "Sparkling Water with Lemon",
                             "Zero sugar, same fizz satisfaction", 95, 40),
        AlternativeCandidate(("soda", "cola"), "Kombucha",
                             "Fermented, low sugar, probiotic benefits", 75, 30),
        AlternativeCandidate(("energy drink", "red bull", "monster"), "Green Tea",
                             "Natural caffeine with L-theanine for smooth energy", 92, 35),
        AlternativeCandidate(("energy drink",), "Black Coffee",
                             "Clean caffeine, zero sugar, antioxidants", 90, 30),
        AlternativeCandidate(("fruit juice", "orange juice", "apple juice"), "Whole Fruit + Water",
                             "Get the fiber, skip the sugar spike", 88, 25),
        AlternativeCandidate(("sports drink", "gatorade", "powerade"), "Coconut Water",
                             "Natural electrolytes without artificial colors", 80, 20),
    ),
    "snacks": (
        AlternativeCandidate(("chips", "doritos", "cheetos", "lays"), "Roasted Chickpeas",
                             "Crunchy, high protein, high fiber", 78, 25),
        AlternativeCandidate(("chips", "crisps"), "Mixed Nuts",
                             "Healthy fats, protein, satisfying crunch", 82, 25),
        AlternativeCandidate(("candy", "gummy", "skittles", "m&m"), "Dark Chocolate (70%+)",
                             "Satisfies sweet tooth with antioxidants", 65, 30),
        AlternativeCandidate(("candy", "sweets"), "Fresh Berries",
                             "Natural sweetness with fiber and vitamins", 90, 35),
        AlternativeCandidate(("cookie", "oreo", "chips ahoy"), "Apple Slices with Almond Butter",
                             "Sweet, satisfying, nutritious", 85, 30),
        AlternativeCandidate(("ice cream",), "Frozen Banana Soft Serve",
                             "Blend frozen bananas for creamy texture", 80, 25),
        AlternativeCandidate(("ice cream",), "Greek Yogurt with Berries",
                             "Creamy, protein-rich, probiotic", 82, 25),
    ),
    "breakfast": (
        AlternativeCandidate(("cereal", "frosted", "fruit loops", "lucky charms"), "Steel Cut Oatmeal",
                             "Whole grain, high fiber, low glycemic", 85, 30),
        AlternativeCandidate(("cereal",), "Greek Yogurt Parfait",
                             "Protein-rich with fresh fruit and nuts", 83, 25),
        AlternativeCandidate(("pastry", "pop tart", "toaster strudel"), "Whole Grain Toast with Nut Butter",
                             "Complex carbs, protein, healthy fats", 78, 30),
        AlternativeCandidate(("pancake", "waffle"), "Oat Pancakes",
                             "Made with oats and banana, no added sugar", 75, 20),
        AlternativeCandidate(("bacon", "sausage"), "Eggs with Avocado",
                             "High protein, healthy fats, no processed meat", 80, 30),
    ),
    "meals": (
        AlternativeCandidate(("instant noodle", "ramen", "cup noodle"), "Rice Noodle Soup with Vegetables",
                             "Less sodium, more nutrients", 70, 25),
        AlternativeCandidate(("hot dog", "corn dog"), "Grilled Chicken Wrap",
                             "Lean protein, no processed meat", 75, 35),
        AlternativeCandidate(("pizza", "frozen pizza"), "Homemade Flatbread with Vegetables",
                             "Control ingredients, add vegetables", 70, 25),
        AlternativeCandidate(("burger", "fast food"), "Black Bean Burger",
                             "High fiber, no processed meat", 72, 25),
        AlternativeCandidate(("fried chicken", "nugget"), "Baked Chicken Breast",
                             "Same protein, no deep frying", 78, 30),
    ),
    "condiments": (
        AlternativeCandidate(("ketchup",), "Fresh Salsa",
                             "Less sugar, more vegetables", 80, 20),
        AlternativeCandidate(("mayo", "mayonnaise"), "Avocado or Hummus",
                             "Healthy fats, more nutrients", 78, 20),
        AlternativeCandidate(("ranch", "blue cheese", "creamy dressing"), "Olive Oil & Lemon Dressing",
                             "Heart-healthy fats, no additives", 85, 25),
    ),
})

BEVERAGE_ALTERNATIVES = CATEGORY_ALTERNATIVES["beverages"]
FOOD_ALTERNATIVES: tuple[AlternativeCandidate, ...] = (
    CATEGORY_ALTERNATIVES["snacks"]
    + CATEGORY_ALTERNATIVES["breakfast"]
    + CATEGORY_ALTERNATIVES["meals"]
    + CATEGORY_ALTERNATIVES["condiments"]
)

# ---------------------------------------------------------------------------
# Absorption-synergy pairings
# ---------------------------------------------------------------------------
PAIRING_SUGGESTIONS: Mapping[str, tuple[PairingCandidate, ...]] = MappingProxyType({
    "iron_absorption": (
        PairingCandidate(("spinach", "lentils", "beans", "tofu"), "Citrus or Bell Peppers",
                         "Vitamin C increases iron absorption by up to 6x", 8),
    ),
    "fat_soluble_vitamins": (
        PairingCandidate(("carrot", "sweet potato", "tomato", "leafy green"), "Olive Oil or Avocado",
                         "Fat helps absorb vitamins A, D, E, K and lycopene", 6),
    ),
    "turmeric_absorption": (
        PairingCandidate(("turmeric", "curry"), "Black Pepper",
                         "Piperine increases curcumin absorption by 2000%", 10),
    ),
    "complete_protein": (
        PairingCandidate(("rice", "grain"), "Beans or Lentils",
                         "Creates complete amino acid profile", 7),
        PairingCandidate(("beans", "lentils", "legume"), "Whole Grain",
                         "Creates complete amino acid profile", 7),
    ),
})
