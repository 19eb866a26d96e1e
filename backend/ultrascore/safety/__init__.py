"""
Advisory safety override: an external oracle may flag a computed score as dangerously misleading.
"""
from .override import (
    OracleVerdict,
    SafetyOracle,
    OllamaSafetyOracle,
    apply_safety_override,
)

__all__ = [
    "OracleVerdict",
    "SafetyOracle",
    "OllamaSafetyOracle",
    "apply_safety_override",
]
