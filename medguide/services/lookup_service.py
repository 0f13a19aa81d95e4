"""
MedGuide Lookup Service - Medicine Search Actions

Wraps the lookup controller and the static catalog for the view layer.
Lookup failures are turned into Notices here and go no further.
"""

import logging
from typing import List

from medguide.catalog import MedicineAnalysis, get_analysis, suggest
from medguide.lookup import (
    LookupController,
    LookupNotFound,
    LookupState,
    MedicineInfo,
)
from medguide.memory.reminder_models import ValidationError
from .notice import DESTRUCTIVE, Notice

logger = logging.getLogger(__name__)

FDA_ATTRIBUTION = "Data provided by the U.S. FDA (OpenFDA), for informational purposes only."


class LookupService:
    """User-facing medicine lookup, autocomplete and safety summaries"""

    def __init__(self, controller: LookupController):
        self.controller = controller
        logger.info("LookupService initialized")

    @property
    def state(self) -> LookupState:
        return self.controller.state

    def lookup(self, medicine_name: str) -> Notice:
        """
        Search OpenFDA for a medicine.

        The result (if any) is left on `state`; the returned Notice tells
        the user what happened.
        """
        try:
            state = self.controller.search(medicine_name)
        except ValidationError:
            return Notice("Validation Error", "Please enter a medicine name.", DESTRUCTIVE)

        if state.result:
            return Notice(
                "Medicine information retrieved",
                f"Found data for {state.result.product_name}"
            )
        if isinstance(state.error, LookupNotFound):
            return Notice("No data found", "No FDA data available for this medicine.", DESTRUCTIVE)

        logger.warning(f"Lookup failed for '{medicine_name}': {state.error}")
        return Notice(
            "Error",
            "Failed to fetch medicine information. Please try again.",
            DESTRUCTIVE
        )

    def suggest(self, query: str) -> List[str]:
        return suggest(query)

    def analyze(self, medicine_name: str) -> MedicineAnalysis:
        return get_analysis(medicine_name)

    def format_info(self, info: MedicineInfo) -> str:
        """
        Format a lookup result for display.

        Args:
            info: MedicineInfo to format

        Returns:
            Multi-line text block
        """
        title = info.product_name
        if info.brand_name and info.brand_name != info.product_name:
            title += f" ({info.brand_name})"

        lines = [f"💊 {title}", "Reported Side Effects:"]
        if info.reactions:
            lines.extend(f"  • {reaction}" for reaction in info.top_reactions())
            if info.more_reactions():
                lines.append(f"  +{info.more_reactions()} more reactions...")
        else:
            lines.append("  No side effects reported")

        lines.append(f"Serious Event: {'Yes' if info.serious else 'No'}")
        lines.append(f"Report Date: {info.display_report_date}")
        lines.append(f"Manufacturer: {info.manufacturer}")
        if info.generic_name:
            lines.append(f"Generic Name: {info.generic_name}")
        lines.append(f"Source Country: {info.source_country}")
        lines.append(FDA_ATTRIBUTION)
        return "\n".join(lines)

    def format_analysis(self, medicine_name: str, analysis: MedicineAnalysis) -> str:
        lines = [
            f"Analysis Summary - {medicine_name} [{analysis.safety_level.value}]",
            f"Common Use Cases: {analysis.common_use}",
            f"Dosage Summary: {analysis.dosage_summary}",
            "Important Warnings:",
        ]
        lines.extend(f"  ⚠ {warning}" for warning in analysis.warnings)
        lines.append("This analysis is for educational purposes only. "
                     "Always consult with a healthcare professional before taking any medication.")
        return "\n".join(lines)
