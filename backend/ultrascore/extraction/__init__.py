from .extractor import ProductAnalysisExtractor, OllamaAnalysisExtractor

__all__ = [
    "ProductAnalysisExtractor",
    "OllamaAnalysisExtractor",
]
