"""Application state and the actions that change it.

The Streamlit script keeps one ReceiptController per browser session and
only ever calls its named actions; the controller itself knows nothing about
widgets, so the whole capture -> review -> save cycle runs in plain tests.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from billscanner.analyzer import BaseAnalyzer, build_analyzer
from billscanner.capture import CapturedImage
from billscanner.config import Settings
from billscanner.config_store import ConfigStore, FileConfigStore
from billscanner.exceptions import ConfirmRejected, UnknownFieldError
from billscanner.models import Category, ScanResult, Transaction, parse_amount
from billscanner.sheet_sync import SheetSync, SyncDelivered, SyncFailed, SyncResult

FORM_FIELDS = ("date", "merchant", "amount", "category", "tax_id", "address", "note")
FIELD_ALIASES = {"taxId": "tax_id"}

VALIDATION_MESSAGE = "Please enter the merchant and an amount greater than zero."
BUSY_MESSAGE = "A save is already in progress."
SYNC_WARNING = "Could not save to Google Sheet, but the record was saved in the app."


class SaveStatus(str, Enum):
    IDLE = "idle"
    SAVING = "saving"
    SUCCESS = "success"


@dataclass(frozen=True)
class Notice:
    level: str  # "success" or "warning"
    message: str


@dataclass
class AppState:
    transactions: List[Transaction] = field(default_factory=list)
    form: ScanResult = field(default_factory=ScanResult.blank)
    image_preview: Optional[str] = None
    is_scanning: bool = False
    show_form: bool = False
    save_status: SaveStatus = SaveStatus.IDLE
    webhook_url: Optional[str] = None
    capture_digest: Optional[str] = None
    uploader_generation: int = 0
    notices: List[Notice] = field(default_factory=list)


@dataclass(frozen=True)
class ConfirmOutcome:
    transaction: Transaction
    sync: Optional[SyncResult] = None

    @property
    def synced(self) -> bool:
        return isinstance(self.sync, SyncDelivered)


def validation_error(form: ScanResult) -> Optional[str]:
    if not form.merchant or form.amount <= 0:
        return VALIDATION_MESSAGE
    return None


class ReceiptController:
    def __init__(
        self,
        analyzer: BaseAnalyzer,
        config_store: ConfigStore,
        sheet_sync: SheetSync,
        local_save_delay: float = 1.0,
        success_delay: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.analyzer = analyzer
        self.config_store = config_store
        self.sheet_sync = sheet_sync
        self.local_save_delay = local_save_delay
        self.success_delay = success_delay
        self.sleep = sleep
        self.clock = clock
        self.state = AppState()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReceiptController":
        controller = cls(
            analyzer=build_analyzer(settings),
            config_store=FileConfigStore(settings.config_path),
            sheet_sync=SheetSync(source=settings.source_tag, timeout=settings.webhook_timeout),
            local_save_delay=settings.local_save_delay,
            success_delay=settings.success_delay,
        )
        controller.load_settings()
        return controller

    # === SETTINGS ===

    @property
    def is_connected(self) -> bool:
        return bool(self.state.webhook_url)

    def load_settings(self) -> None:
        self.state.webhook_url = self.config_store.load()
        logger.info("Google Sheet sync {}", "configured" if self.is_connected else "not configured, saving locally only")

    def settings_save(self, url: str) -> None:
        url = (url or "").strip()
        self.config_store.save(url)
        self.state.webhook_url = url or None
        self.state.notices.append(Notice("success", "Google Sheet URL saved."))

    # === CAPTURE / ANALYZE ===

    def capture(self, image: Optional[CapturedImage]) -> bool:
        """Show a new receipt image and enter the scanning state.

        Returns False (and changes nothing) when there is no image or it is the
        one already on screen.
        """
        if image is None or image.digest == self.state.capture_digest:
            return False
        self.state.capture_digest = image.digest
        self.state.image_preview = image.data_uri
        self.state.is_scanning = True
        self.state.show_form = False
        return True

    def analyze_complete(self, result: ScanResult) -> None:
        self.state.form = result
        self.state.is_scanning = False
        self.state.show_form = True

    def scan(self, image: Optional[CapturedImage]) -> bool:
        if not self.capture(image):
            return False
        result = self.analyzer.analyze(image.base64_payload, image.mime_type)
        self.analyze_complete(result)
        return True

    # === REVIEW FORM ===

    def edit_field(self, name: str, value) -> None:
        name = FIELD_ALIASES.get(name, name)
        if name not in FORM_FIELDS:
            raise UnknownFieldError(name)
        if name == "amount":
            value = parse_amount(value)
        elif name == "category":
            value = Category.from_label(value)
        else:
            value = "" if value is None else str(value)
        self.state.form = self.state.form.model_copy(update={name: value})

    # === SAVE ===

    def confirm(self) -> ConfirmOutcome:
        error = validation_error(self.state.form)
        if error:
            raise ConfirmRejected(error)
        if self.state.save_status is not SaveStatus.IDLE:
            raise ConfirmRejected(BUSY_MESSAGE)

        self.state.save_status = SaveStatus.SAVING
        transaction = Transaction.from_scan(self.state.form, now=self.clock())

        sync = None
        if self.state.webhook_url:
            try:
                sync = self.sheet_sync.push(self.state.webhook_url, transaction)
            except Exception as e:
                # the local save goes ahead whatever the webhook does
                logger.exception("Unexpected sheet sync failure for {}", transaction.id)
                sync = SyncFailed(reason=str(e))
            if isinstance(sync, SyncFailed):
                self.state.notices.append(Notice("warning", SYNC_WARNING))
        else:
            self.sleep(self.local_save_delay)

        self.state.transactions.insert(0, transaction)
        self.state.save_status = SaveStatus.SUCCESS
        logger.info("Saved {} - {} ({} in session)", transaction.merchant, transaction.amount, len(self.state.transactions))
        return ConfirmOutcome(transaction=transaction, sync=sync)

    def finish_save(self) -> None:
        """Hold the success state briefly, then clear the form for the next receipt."""
        if self.state.save_status is not SaveStatus.SUCCESS:
            return
        self.sleep(self.success_delay)
        self.state.save_status = SaveStatus.IDLE
        self.state.show_form = False
        self.state.image_preview = None
        self.state.capture_digest = None
        self.state.uploader_generation += 1

    def drain_notices(self) -> List[Notice]:
        notices, self.state.notices = self.state.notices, []
        return notices
