"""Shared fixtures: a fake analyzer, an in-memory config store and a recording sleep."""

from typing import List, Optional
from unittest.mock import MagicMock

import pytest

from billscanner.analyzer import BaseAnalyzer, failed_scan_result
from billscanner.capture import CapturedImage
from billscanner.config_store import InMemoryConfigStore
from billscanner.controller import ReceiptController
from billscanner.models import Category, ScanResult
from billscanner.sheet_sync import SheetSync, SyncDelivered


class FakeAnalyzer(BaseAnalyzer):
    """Returns a fixed result (or the failure record) without calling a model."""

    def __init__(self, result: Optional[ScanResult] = None, fail: bool = False) -> None:
        self.result = result or ScanResult(
            date="2026-10-01",
            merchant="Test Store",
            amount=150.5,
            category=Category.MEALS,
            note="lunch",
        )
        self.fail = fail
        self.calls: List[tuple] = []

    def analyze(self, image_b64: str, mime_type: str) -> ScanResult:
        self.calls.append((image_b64, mime_type))
        return failed_scan_result() if self.fail else self.result

    def _call_model(self, image_b64: str, mime_type: str) -> Optional[str]:
        raise NotImplementedError


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def sheet_sync() -> MagicMock:
    sync = MagicMock(spec=SheetSync)
    sync.push.return_value = SyncDelivered(status_code=200)
    return sync


@pytest.fixture
def config_store() -> InMemoryConfigStore:
    return InMemoryConfigStore()


@pytest.fixture
def controller(fake_analyzer, config_store, sheet_sync, sleep) -> ReceiptController:
    return ReceiptController(
        analyzer=fake_analyzer,
        config_store=config_store,
        sheet_sync=sheet_sync,
        local_save_delay=1.0,
        success_delay=1.5,
        sleep=sleep,
    )


@pytest.fixture
def receipt_image() -> CapturedImage:
    return CapturedImage(data=b"\xff\xd8\xff\xe0fake-jpeg", mime_type="image/jpeg", name="slip.jpg")
