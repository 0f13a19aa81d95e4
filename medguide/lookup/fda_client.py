"""
MedGuide OpenFDA Client - Adverse Event Lookup

Responsibilities:
- One read-only GET against the OpenFDA drug event endpoint
- Map the first matching report to MedicineInfo
- Explicit error types for "not found" vs transport failure
- No retries; the user resubmits
"""

import logging
from typing import Optional

import requests

from medguide.memory.reminder_models import ValidationError
from .medicine_info import MedicineInfo

logger = logging.getLogger(__name__)


class MedicineLookupError(Exception):
    """Base exception for medicine lookup failures"""
    pass


class LookupNotFound(MedicineLookupError):
    """Raised when OpenFDA has no report for the medicine"""

    def __init__(self, query: str):
        super().__init__(f"No data available for '{query}'")
        self.query = query


class LookupTransportError(MedicineLookupError):
    """Raised on network failure, bad status or malformed response"""
    pass


class OpenFDAClient:
    """
    Client for the OpenFDA drug adverse event API.

    Example:
        >>> client = OpenFDAClient()
        >>> info = client.fetch("Paracetamol")
        >>> print(info.product_name, info.display_report_date)
    """

    DEFAULT_BASE_URL = "https://api.fda.gov/drug/event.json"
    DEFAULT_TIMEOUT = 10  # seconds

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize OpenFDA client.

        Args:
            base_url: Drug event endpoint URL
            timeout: Request timeout in seconds
            session: requests.Session to use (a new one by default)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

        logger.info(f"OpenFDAClient initialized (base_url={self.base_url}, timeout={timeout}s)")

    def close(self):
        self.session.close()

    def fetch(self, medicine_name: str) -> MedicineInfo:
        """
        Fetch the most relevant adverse event report for a medicine.

        Args:
            medicine_name: Medicine to search for

        Returns:
            MedicineInfo for the first matching report

        Raises:
            ValidationError: If medicine_name is blank
            LookupNotFound: If OpenFDA has no matching report
            LookupTransportError: On any request or response failure
        """
        if not medicine_name or not medicine_name.strip():
            raise ValidationError("Please enter a medicine name.", field="name")
        query = medicine_name.strip()

        params = {
            'search': f'patient.drug.medicinalproduct:"{query}"',
            'limit': 1,
        }

        logger.debug(f"OpenFDA request: {query}")
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            logger.error(f"OpenFDA request timed out after {self.timeout}s")
            raise LookupTransportError(f"Request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            logger.error(f"OpenFDA request failed: {e}")
            raise LookupTransportError(f"Failed to fetch data from FDA API: {e}") from e

        # OpenFDA answers an empty search with 404 NOT_FOUND
        if response.status_code == 404:
            logger.info(f"OpenFDA: no match for '{query}'")
            raise LookupNotFound(query)

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"OpenFDA returned HTTP {response.status_code}")
            raise LookupTransportError(f"FDA API returned HTTP {response.status_code}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"OpenFDA returned invalid JSON: {e}")
            raise LookupTransportError("FDA API returned malformed response") from e

        if not isinstance(data, dict):
            raise LookupTransportError("FDA API returned malformed response")

        results = data.get('results') or []
        if not results:
            logger.info(f"OpenFDA: no results for '{query}'")
            raise LookupNotFound(query)

        try:
            info = MedicineInfo.from_fda_result(results[0], query)
        except (TypeError, KeyError, AttributeError) as e:
            logger.error(f"Unexpected OpenFDA result shape: {e}", exc_info=True)
            raise LookupTransportError("FDA API returned malformed response") from e

        logger.info(f"OpenFDA: found {info.product_name} ({len(info.reactions)} reactions)")
        return info
