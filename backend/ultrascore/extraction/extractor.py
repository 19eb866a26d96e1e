"""
Product analysis extraction: free-text product description -> ProductAnalysis.

The LLM only fills in the structured record; ProductAnalysis.from_dict is the boundary
validator. A non-consumer verdict is returned as data so the dispatcher can reject it.
"""
import logging
from typing import Optional, Protocol

from ultrascore import config
from ultrascore.errors import ExtractionError
from ultrascore.llm import call_ollama, parse_json_response
from ultrascore.models.analysis import ProductAnalysis

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = """You are ULTRASCORE, analyzing consumer products for health. Respond ONLY with valid JSON in this exact format:
{
  "isConsumerProduct": boolean,
  "rejectionReason": string | null,
  "productName": string,
  "productCategory": "Food" | "Beverage" | "PersonalCare",
  "processingLevel": "Unprocessed/Minimally Processed" | "Processed Culinary Ingredients" | "Processed Foods" | "Ultra-Processed Foods",
  "nutrientsPer100g": {
    "calories": number, "protein": number, "totalFat": number, "saturatedFat": number,
    "unsaturatedFat": number, "transFat": number, "omega3": number, "carbohydrates": number,
    "fiber": number, "addedSugar": number, "sodium": number, "potassium": number
  } | null,
  "glycemicLoad": number | null,
  "proteinSources": string[],
  "fatSources": string[],
  "additives": string[],
  "sweeteners": string[],
  "isFermented": boolean,
  "fermentationType": string | null,
  "hasLiveCultures": boolean,
  "polyphenolSources": string[],
  "wholeFoodPercentage": number | null,
  "fruitVegPercentage": number | null,
  "beverageType": string | null,
  "personalCareDetails": { "harmfulIngredients": string[], "beneficialIngredients": string[], "hasFragrance": boolean, "isCrueltyFree": boolean, "isEWGVerified": boolean } | null,
  "healthierAlternative": { "productName": string, "description": string, "estimatedScore": number } | null,
  "dataCompleteness": number
}

RULES:
- Sodium and potassium in mg, everything else in g. Omit nutrient fields you do not know; never guess zero.
- proteinSources/fatSources use snake_case tags (e.g. "fatty_fish", "processed_meat", "olive_oil", "industrial_trans_fat").
- beverageType uses snake_case (e.g. "water", "green_tea", "soda", "energy_drink").
- If the item is not a food, beverage or personal care product, set isConsumerProduct=false with a rejectionReason.
- Return ONLY valid JSON. No markdown, no explanation."""


class ProductAnalysisExtractor(Protocol):
    def extract(self, term: str) -> ProductAnalysis:
        ...


class OllamaAnalysisExtractor:
    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout if timeout is not None else config.EXTRACTION_TIMEOUT

    def extract(self, term: str) -> ProductAnalysis:
        if not term or not term.strip():
            raise ExtractionError("Product term is required")

        prompt = f'Product: "{term.strip()}"\n\nReturn the structured JSON:'
        raw = call_ollama(
            prompt, _SYSTEM_PROMPT, timeout=self.timeout, num_predict=1200, log_prefix="EXTRACT"
        )
        if not raw:
            raise ExtractionError("AI analysis failed. Please try again with a different product.")

        data = parse_json_response(raw, log_prefix="EXTRACT")
        if data is None:
            raise ExtractionError("AI returned malformed data. Please try again.")

        analysis = ProductAnalysis.from_dict(data)
        logger.info(
            "EXTRACT success term=%s product=%s category=%s consumer=%s",
            term[:60], analysis.product_name, analysis.product_category, analysis.is_consumer_product,
        )
        return analysis
