"""
MedGuide Suggestions - Static Medicine Name Autocomplete
"""

from typing import List

MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 8

MEDICINE_SUGGESTIONS = [
    "Paracetamol", "Ibuprofen", "Aspirin", "Amoxicillin", "Metformin",
    "Lisinopril", "Simvastatin", "Omeprazole", "Amlodipine", "Metoprolol",
    "Hydrochlorothiazide", "Losartan", "Furosemide", "Prednisone", "Warfarin",
    "Insulin", "Levothyroxine", "Atorvastatin", "Clopidogrel", "Ramipril",
    "Doxycycline", "Ciprofloxacin", "Azithromycin", "Cephalexin", "Clindamycin",
    "Tramadol", "Codeine", "Morphine", "Diazepam", "Lorazepam",
]


def suggest(query: str, limit: int = DEFAULT_LIMIT) -> List[str]:
    """
    Medicine names containing `query` (case-insensitive), in list order.

    Queries shorter than two characters match nothing.
    """
    needle = (query or "").strip().lower()
    if len(needle) < MIN_QUERY_LENGTH:
        return []
    return [name for name in MEDICINE_SUGGESTIONS if needle in name.lower()][:limit]
