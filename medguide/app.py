"""
MedGuide Application - Top-Level Lifecycle

Builds every part once in init(), hands them to each other by reference,
and tears them down in dispose(). Nothing is stored in module globals.
"""

import logging
from typing import Callable, Optional

from medguide.config import Settings
from medguide.lookup import LookupController, OpenFDAClient
from medguide.memory import JsonFileStorage, PersistenceWarning, ReminderStore
from medguide.services import LookupService, ReminderService

logger = logging.getLogger(__name__)


class MedGuideApp:
    """
    Owns the reminder store, the OpenFDA client and the services.

    Usage:
        with MedGuideApp(Settings.from_env()) as app:
            app.reminders.add_reminder("Paracetamol", "08:00", "daily")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage=None,
        client: Optional[OpenFDAClient] = None,
        on_warning: Optional[Callable[[PersistenceWarning], None]] = None
    ):
        """
        Args:
            settings: Configuration (defaults if omitted)
            storage: Storage backend override (JsonFileStorage at settings.storage_path by default)
            client: OpenFDA client override
            on_warning: Called for each persistence warning
        """
        self.settings = settings or Settings()
        self._storage = storage
        self._client = client
        self._on_warning = on_warning

        self.store: Optional[ReminderStore] = None
        self.client: Optional[OpenFDAClient] = None
        self.reminders: Optional[ReminderService] = None
        self.lookup: Optional[LookupService] = None

    @property
    def is_running(self) -> bool:
        return self.store is not None and self.store.is_active

    def init(self) -> 'MedGuideApp':
        if self.is_running:
            return self

        storage = self._storage or JsonFileStorage(self.settings.storage_path)
        self.store = ReminderStore(storage, on_warning=self._on_warning).init()

        if self._client is not None:
            self.client = self._client
        else:
            self.client = OpenFDAClient(
                base_url=self.settings.fda_base_url,
                timeout=self.settings.fda_timeout,
            )

        self.reminders = ReminderService(self.store)
        self.lookup = LookupService(LookupController(self.client))

        logger.info("MedGuide initialized")
        return self

    def dispose(self):
        # An injected client belongs to the caller
        if self.client is not None and self.client is not self._client:
            self.client.close()
        if self.store is not None:
            self.store.dispose()

        self.store = None
        self.client = None
        self.reminders = None
        self.lookup = None
        logger.info("MedGuide disposed")

    def __enter__(self) -> 'MedGuideApp':
        return self.init()

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
