"""
MedGuide Catalog - Static Medicine Data

Autocomplete names and safety summaries. No network access.
"""

from .analysis import MedicineAnalysis, SafetyLevel, get_analysis
from .suggestions import MEDICINE_SUGGESTIONS, suggest

__all__ = [
    'MedicineAnalysis',
    'SafetyLevel',
    'get_analysis',
    'MEDICINE_SUGGESTIONS',
    'suggest',
]
