"""
Ollama product analysis extractor: prompt -> JSON -> ProductAnalysis, ExtractionError on failure.
"""
import json
from unittest.mock import MagicMock, patch

import pytest
import requests


def _ollama(text):
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json = lambda: {"response": text}
    return resp


def test_extract_parses_analysis():
    from ultrascore.extraction.extractor import OllamaAnalysisExtractor
    from ultrascore.models.analysis import ProcessingLevel, ProductCategory
    payload = {
        "isConsumerProduct": True,
        "productName": "Greek Yogurt",
        "productCategory": "Food",
        "processingLevel": "Processed Foods",
        "nutrientsPer100g": {"protein": 10, "fiber": 0, "addedSugar": 3},
        "isFermented": True,
        "fermentationType": "yogurt",
        "hasLiveCultures": True,
    }
    with patch("ultrascore.llm.requests.post", return_value=_ollama("```json\n" + json.dumps(payload) + "\n```")) as post:
        analysis = OllamaAnalysisExtractor(timeout=5).extract("  greek yogurt ")
    assert analysis.product_name == "Greek Yogurt"
    assert analysis.product_category == ProductCategory.FOOD
    assert analysis.processing_level == ProcessingLevel.PROCESSED
    assert analysis.nutrients.protein == 10
    assert analysis.has_live_cultures is True
    assert post.call_args.kwargs["timeout"] == 5
    assert '"greek yogurt"' in post.call_args.kwargs["json"]["prompt"]


def test_non_consumer_returned_as_data():
    from ultrascore.extraction.extractor import OllamaAnalysisExtractor
    body = '{"isConsumerProduct": false, "rejectionReason": "A car is not a consumer product"}'
    with patch("ultrascore.llm.requests.post", return_value=_ollama(body)):
        analysis = OllamaAnalysisExtractor().extract("car")
    assert analysis.is_consumer_product is False
    assert analysis.rejection_reason == "A car is not a consumer product"


def test_empty_term():
    from ultrascore.errors import ExtractionError
    from ultrascore.extraction.extractor import OllamaAnalysisExtractor
    with pytest.raises(ExtractionError):
        OllamaAnalysisExtractor().extract("   ")


def test_unreachable_model():
    from ultrascore.errors import ExtractionError
    from ultrascore.extraction.extractor import OllamaAnalysisExtractor
    with patch("ultrascore.llm.requests.post", side_effect=requests.Timeout("slow")):
        with pytest.raises(ExtractionError, match="AI analysis failed"):
            OllamaAnalysisExtractor().extract("oats")


def test_malformed_response():
    from ultrascore.errors import ExtractionError
    from ultrascore.extraction.extractor import OllamaAnalysisExtractor
    with patch("ultrascore.llm.requests.post", return_value=_ollama("I think it is healthy")):
        with pytest.raises(ExtractionError, match="malformed"):
            OllamaAnalysisExtractor().extract("oats")
