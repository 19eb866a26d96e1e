#!/usr/bin/env python3
"""
Score product analyses from a JSON file offline (no extraction, no quota, no safety oracle).
Run from backend: python scripts/score_file.py path/to/analysis.json [--compact]
The file holds one analysis object or a list of them. Exit 1 if any analysis was rejected.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, List

# Add backend to path when run as script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def load_analyses(path: Path) -> List[dict]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [d for d in data if isinstance(d, dict)]
    raise ValueError(f"{path}: expected a JSON object or list of objects")


def score_all(analyses: List[dict]) -> List[dict[str, Any]]:
    from ultrascore.errors import ScoringError
    from ultrascore.models.analysis import ProductAnalysis
    from ultrascore.pipeline import ScanPipeline

    pipeline = ScanPipeline()
    out = []
    for raw in analyses:
        analysis = ProductAnalysis.from_dict(raw)
        try:
            out.append(pipeline.score_analysis(analysis).to_dict())
        except ScoringError as e:
            out.append({"productName": analysis.product_name, "error": str(e)})
    return out


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Score product analysis JSON offline")
    parser.add_argument("path", type=Path)
    parser.add_argument("--compact", action="store_true", help="print one summary line per product")
    args = parser.parse_args(argv)

    results = score_all(load_analyses(args.path))
    if args.compact:
        for r in results:
            if "error" in r:
                print(f"{r['productName']}: REJECTED - {r['error']}")
            else:
                print(f"{r['productName']}: {r['finalScore']} {r['category']} ({r['grade']})")
    else:
        print(json.dumps(results, indent=2))
    return 1 if any("error" in r for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())
