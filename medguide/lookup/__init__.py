"""
MedGuide Lookup - OpenFDA Adverse Event Reports

One outbound read per user search; the latest search always wins.
"""

from .fda_client import (
    OpenFDAClient,
    MedicineLookupError,
    LookupNotFound,
    LookupTransportError,
)
from .lookup_controller import LookupController, LookupState
from .medicine_info import MedicineInfo, format_report_date

__all__ = [
    'OpenFDAClient',
    'MedicineLookupError',
    'LookupNotFound',
    'LookupTransportError',
    'LookupController',
    'LookupState',
    'MedicineInfo',
    'format_report_date',
]
