"""
MedGuide Analysis - Static Safety Summaries

Hand-written summaries for a few common medicines. Educational only;
anything not listed gets a generic "ask your provider" summary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class SafetyLevel(Enum):
    SAFE = "Safe"
    CAUTION = "Caution"
    RISKY = "Risky"


@dataclass(frozen=True)
class MedicineAnalysis:
    safety_level: SafetyLevel
    common_use: str
    dosage_summary: str
    warnings: List[str] = field(default_factory=list)
    is_default: bool = False


MEDICINE_ANALYSIS: Dict[str, MedicineAnalysis] = {
    "paracetamol": MedicineAnalysis(
        safety_level=SafetyLevel.SAFE,
        common_use="Fever, Pain relief, Headache",
        dosage_summary="Adults: 500-1000mg every 4-6 hours, max 4g/day",
        warnings=["Do not exceed 4g daily", "Avoid with liver disease", "Check with alcohol use"],
    ),
    "ibuprofen": MedicineAnalysis(
        safety_level=SafetyLevel.CAUTION,
        common_use="Inflammation, Pain relief, Fever",
        dosage_summary="Adults: 200-400mg every 4-6 hours, max 1.2g/day",
        warnings=["Take with food", "Avoid with stomach ulcers", "Monitor blood pressure"],
    ),
    "aspirin": MedicineAnalysis(
        safety_level=SafetyLevel.CAUTION,
        common_use="Heart protection, Pain relief, Anti-inflammatory",
        dosage_summary="Low dose: 75-100mg daily; Pain: 300-600mg every 4 hours",
        warnings=["Not for children under 16", "Bleeding risk", "Take with food"],
    ),
    "amoxicillin": MedicineAnalysis(
        safety_level=SafetyLevel.SAFE,
        common_use="Bacterial infections, Respiratory infections",
        dosage_summary="Adults: 250-500mg every 8 hours for 7-10 days",
        warnings=["Complete full course", "Check for penicillin allergy", "Take with or without food"],
    ),
    "metformin": MedicineAnalysis(
        safety_level=SafetyLevel.SAFE,
        common_use="Type 2 Diabetes, Blood sugar control",
        dosage_summary="Adults: Start 500mg twice daily, max 2g/day",
        warnings=["Take with meals", "Monitor kidney function", "Stop before surgery"],
    ),
}

DEFAULT_ANALYSIS = MedicineAnalysis(
    safety_level=SafetyLevel.CAUTION,
    common_use="Consult healthcare provider for specific uses",
    dosage_summary="Follow healthcare provider's prescription",
    warnings=[
        "Always consult healthcare provider",
        "Read medication label carefully",
        "Report side effects",
    ],
    is_default=True,
)


def get_analysis(medicine_name: str) -> MedicineAnalysis:
    """Summary for a medicine, matched case-insensitively"""
    return MEDICINE_ANALYSIS.get((medicine_name or "").strip().lower(), DEFAULT_ANALYSIS)
