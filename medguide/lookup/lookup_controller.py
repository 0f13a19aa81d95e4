"""
MedGuide Lookup Controller - Latest Search Wins

Holds the visible lookup state (loading / result / error) and makes sure a
slow response from an older search can never overwrite a newer one.

Every search is tagged with a monotonically increasing number. A completion
is applied only if its tag is still the latest issued tag.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from medguide.memory.reminder_models import ValidationError
from .fda_client import LookupNotFound, MedicineLookupError, OpenFDAClient
from .medicine_info import MedicineInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupState:
    """Snapshot of what the lookup view should show"""
    query: str = ""
    is_loading: bool = False
    result: Optional[MedicineInfo] = None
    error: Optional[MedicineLookupError] = None

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, LookupNotFound)


class LookupController:
    """
    Sequence-tagged lookup state.

    Usage:
        controller = LookupController(client)
        state = controller.search("Ibuprofen")
        if state.result:
            ...
    """

    def __init__(self, client: OpenFDAClient):
        self.client = client
        self._lock = threading.Lock()
        self._latest_tag = 0
        self._state = LookupState()

    @property
    def state(self) -> LookupState:
        with self._lock:
            return self._state

    @property
    def latest_tag(self) -> int:
        with self._lock:
            return self._latest_tag

    def begin(self, query: str) -> int:
        """
        Start a new lookup and return its tag.

        Clears the previous result and error and marks the view as loading.
        """
        with self._lock:
            self._latest_tag += 1
            tag = self._latest_tag
            self._state = LookupState(query=query, is_loading=True)
        logger.debug(f"Lookup #{tag} started: {query}")
        return tag

    def _apply(self, tag: int, result: Optional[MedicineInfo], error: Optional[MedicineLookupError]) -> bool:
        with self._lock:
            if tag != self._latest_tag:
                logger.info(f"Discarding stale lookup #{tag} (latest is #{self._latest_tag})")
                return False
            self._state = LookupState(
                query=self._state.query,
                is_loading=False,
                result=result,
                error=error,
            )
        return True

    def complete(self, tag: int, info: MedicineInfo) -> bool:
        """Apply a successful result; False if the tag is stale"""
        return self._apply(tag, info, None)

    def fail(self, tag: int, error: MedicineLookupError) -> bool:
        """Apply a failure; False if the tag is stale"""
        return self._apply(tag, None, error)

    def _run(self, tag: int, query: str):
        try:
            info = self.client.fetch(query)
        except MedicineLookupError as e:
            self.fail(tag, e)
        else:
            self.complete(tag, info)

    def search(self, query: str) -> LookupState:
        """
        Run a lookup on the calling thread.

        Raises:
            ValidationError: If query is blank (state is left untouched)
        """
        if not query or not query.strip():
            raise ValidationError("Please enter a medicine name.", field="name")
        query = query.strip()

        tag = self.begin(query)
        self._run(tag, query)
        return self.state

    def search_in_background(
        self,
        query: str,
        on_done: Optional[Callable[[int, LookupState], None]] = None
    ) -> threading.Thread:
        """
        Run a lookup on a daemon thread.

        Args:
            query: Medicine name
            on_done: Called with (tag, state) when this lookup finishes,
                     whether or not its result was applied

        Returns:
            The started thread

        Raises:
            ValidationError: If query is blank
        """
        if not query or not query.strip():
            raise ValidationError("Please enter a medicine name.", field="name")
        query = query.strip()

        tag = self.begin(query)

        def worker():
            try:
                self._run(tag, query)
            except Exception as e:
                logger.error(f"Lookup #{tag} crashed: {e}", exc_info=True)
                self.fail(tag, MedicineLookupError(str(e)))
            if on_done:
                try:
                    on_done(tag, self.state)
                except Exception as e:
                    logger.error(f"Lookup #{tag} callback failed: {e}", exc_info=True)

        thread = threading.Thread(target=worker, name=f"lookup-{tag}", daemon=True)
        thread.start()
        return thread
