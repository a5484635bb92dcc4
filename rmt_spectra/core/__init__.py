"""
Shared infrastructure: errors, numeric guards and random sources.
"""

from .errors import (RMTError, DomainError, InvalidDimension, InsufficientData,
                     DegenerateSpacing, InvalidBinCount)
from .numerics import NumericPolicy, DEFAULT_POLICY, safe_sqrt, safe_log
from .random_source import RandomSource, GeneratorSource, CallableSource, as_random_source

__all__ = [
    "RMTError", "DomainError", "InvalidDimension", "InsufficientData",
    "DegenerateSpacing", "InvalidBinCount",
    "NumericPolicy", "DEFAULT_POLICY", "safe_sqrt", "safe_log",
    "RandomSource", "GeneratorSource", "CallableSource", "as_random_source"
]
