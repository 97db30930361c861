"""
MediYap - decode medical terminology into plain English
"""

from .core.decoder import ComponentMatch, DecodedTerm, MedicalDecoder
from .core.dictionary import AffixEntry, MedicalDictionary

__version__ = "1.0.0"

__all__ = [
    "AffixEntry",
    "ComponentMatch",
    "DecodedTerm",
    "MedicalDecoder",
    "MedicalDictionary",
]
