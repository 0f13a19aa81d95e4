"""
MedGuide Medicine Info - OpenFDA Adverse Event Record

Flattens one OpenFDA drug event result into the fields shown to the user.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

UNKNOWN = "Unknown"


def format_report_date(date_str: Optional[str]) -> str:
    """
    Reformat an OpenFDA YYYYMMDD date as MM/DD/YYYY.

    Anything that is not exactly 8 characters is returned unchanged.
    """
    if not date_str or len(date_str) != 8:
        return date_str or ""
    return f"{date_str[4:6]}/{date_str[6:8]}/{date_str[0:4]}"


def _text(value: Any, name: str) -> Optional[str]:
    """Optional text field; anything but a string is a malformed record"""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    return value


def _first(values: Any, name: str) -> Optional[str]:
    if isinstance(values, list) and values:
        return _text(values[0], name)
    return None


@dataclass
class MedicineInfo:
    """
    Adverse event summary for one medicine.

    Attributes:
        product_name: Medicinal product as reported (falls back to the query)
        reactions: Reported reaction labels (MedDRA preferred terms)
        serious: Whether the report was flagged serious
        report_date: Raw YYYYMMDD receive date
        manufacturer: First listed manufacturer, or "Unknown"
        brand_name: First listed brand name, if any
        generic_name: First listed generic name, if any
        source_country: Primary source country, or "Unknown"
    """
    product_name: str
    reactions: List[str] = field(default_factory=list)
    serious: bool = False
    report_date: str = ""
    manufacturer: str = UNKNOWN
    brand_name: Optional[str] = None
    generic_name: Optional[str] = None
    source_country: str = UNKNOWN

    @property
    def display_report_date(self) -> str:
        return format_report_date(self.report_date)

    def top_reactions(self, limit: int = 5) -> List[str]:
        return self.reactions[:limit]

    def more_reactions(self, limit: int = 5) -> int:
        """Number of reactions beyond the first `limit`"""
        return max(0, len(self.reactions) - limit)

    @classmethod
    def from_fda_result(cls, result: Dict[str, Any], query: str) -> 'MedicineInfo':
        """
        Build from one entry of an OpenFDA `results` array.

        Raises:
            TypeError, KeyError, AttributeError: If the entry has the wrong shape
        """
        patient = result.get('patient') or {}
        drugs = patient.get('drug') or []
        drug = drugs[0] if drugs else {}
        openfda = drug.get('openfda') or {}

        reactions = []
        for reaction in patient.get('reaction') or []:
            label = _text(reaction.get('reactionmeddrapt'), 'reactionmeddrapt')
            if label:
                reactions.append(label)

        return cls(
            product_name=_text(drug.get('medicinalproduct'), 'medicinalproduct') or query,
            reactions=reactions,
            serious=str(result.get('serious', '')) == "1",
            report_date=_text(result.get('receivedate'), 'receivedate') or "",
            manufacturer=_first(openfda.get('manufacturer_name'), 'manufacturer_name') or UNKNOWN,
            brand_name=_first(openfda.get('brand_name'), 'brand_name'),
            generic_name=_first(openfda.get('generic_name'), 'generic_name'),
            source_country=_text(result.get('primarysourcecountry'), 'primarysourcecountry') or UNKNOWN,
        )
