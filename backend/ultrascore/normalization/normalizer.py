"""
Deterministic normalization only. No LLM, no substring guessing.
Used to produce a key for evidence table lookup; unknown keys contribute nothing.
"""
import re
import logging
from typing import Mapping, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Known spelling variants for table lookup (normalized key -> canonical key)
KNOWN_VARIANTS: dict[str, str] = {
    # Sweeteners
    "acesulfame_potassium": "acesulfame_k",
    "acesulfame": "acesulfame_k",
    "ace_k": "acesulfame_k",
    "e950": "acesulfame_k",
    "e951": "aspartame",
    "e955": "sucralose",
    "e954": "saccharin",
    "e968": "erythritol",
    "e967": "xylitol",
    "e960": "stevia",
    "steviol_glycosides": "stevia",
    "stevia_extract": "stevia",
    "splenda": "sucralose",
    # Additives
    "high_fructose_corn_syrup": "hfcs",
    "glucose_fructose_syrup": "hfcs",
    "monosodium_glutamate": "msg",
    "e621": "msg",
    "e171": "titanium_dioxide",
    "e250": "sodium_nitrite",
    "nitrite": "sodium_nitrite",
    "e407": "carrageenan",
    "e433": "polysorbate_80",
    "polysorbate80": "polysorbate_80",
    "bha": "bha_bht",
    "bht": "bha_bht",
    "e320": "bha_bht",
    "e321": "bha_bht",
    "bvo": "brominated_vegetable_oil",
    "partially_hydrogenated_oil": "trans_fats",
    "partially_hydrogenated_oils": "trans_fats",
    "trans_fat": "trans_fats",
    "artificial_color": "artificial_colors",
    "artificial_colours": "artificial_colors",
    "lecithin": "soy_lecithin",
    "e322": "soy_lecithin",
    "e330": "citric_acid",
    "e415": "xanthan_gum",
    "e412": "guar_gum",
    "mixed_tocopherols": "tocopherols",
    "e306": "tocopherols",
    "vitamin_c": "ascorbic_acid",
    "e300": "ascorbic_acid",
}


def normalize_key(text: str) -> str:
    """
    Normalize a raw additive/sweetener/source string for lookup.
    - Lowercase, strip, collapse runs of non-alphanumerics to a single underscore.
    - Apply known variants (e.g. high fructose corn syrup -> hfcs).
    - No substring or fuzzy matching.
    """
    if not text or not isinstance(text, str):
        return ""
    t = _NON_ALNUM.sub("_", text.lower().strip()).strip("_")
    if t in KNOWN_VARIANTS:
        canonical = KNOWN_VARIANTS[t]
        logger.debug("NORMALIZE variant applied raw=%s -> canonical=%s", t, canonical)
        return canonical
    return t


def lookup(table: Mapping[str, T], raw: str) -> Optional[T]:
    """Normalized table lookup. Unrecognized entries return None and are not an error."""
    key = normalize_key(raw)
    if not key:
        return None
    entry = table.get(key)
    if entry is None:
        logger.debug("NORMALIZE unknown key raw=%s key=%s", raw, key)
    return entry
