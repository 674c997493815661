"""Receipt analyzers.

``BaseAnalyzer.analyze`` holds the response handling shared by every
analyzer: JSON extraction, defaults for missing fields and the degraded
record returned on any failure. Subclasses only provide ``_call_model``.
"""
from __future__ import annotations

import abc
import json
import re
import time
from typing import Callable, Optional

from langchain_core.messages import HumanMessage
from langchain_openai import AzureChatOpenAI
from loguru import logger

from billscanner.config import Settings
from billscanner.exceptions import AnalyzerError
from billscanner.models import Category, ScanResult, parse_amount, today_iso
from billscanner.prompts import RESPONSE_FORMAT, build_receipt_prompt

UNKNOWN_MERCHANT = "Unknown Merchant"
ERROR_MERCHANT = "Error Reading Slip"
ERROR_NOTE = "Could not analyze image"

_JSON_FENCE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


def failed_scan_result() -> ScanResult:
    return ScanResult(
        merchant=ERROR_MERCHANT,
        date=today_iso(),
        amount=0.0,
        category=Category.OTHER,
        note=ERROR_NOTE,
    )


def parse_scan_json(text: Optional[str]) -> ScanResult:
    """Turn the model's JSON text into a ScanResult, filling defaults.

    Raises AnalyzerError when there is no text or it is not a JSON object.
    """
    if not text or not text.strip():
        raise AnalyzerError("No response from model")

    match = _JSON_FENCE.search(text)
    payload = match.group(1) if match else text
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise AnalyzerError(f"Model returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AnalyzerError(f"Expected a JSON object, got {type(data).__name__}")

    category = Category.from_label(data.get("category"))
    if data.get("category") and category is Category.OTHER and data["category"] != Category.OTHER.value:
        logger.warning("Model returned unknown category {!r}, using Other", data["category"])

    return ScanResult(
        merchant=str(data.get("merchant") or UNKNOWN_MERCHANT),
        date=str(data.get("date") or today_iso()),
        amount=parse_amount(data.get("amount") or 0),
        category=category,
        tax_id=str(data.get("taxId") or ""),
        address=str(data.get("address") or ""),
        note=str(data.get("note") or ""),
    )


class BaseAnalyzer(abc.ABC):
    """Extracts a ScanResult from a receipt image. Never raises."""

    def analyze(self, image_b64: str, mime_type: str) -> ScanResult:
        try:
            logger.info("Analyzing receipt image ({})", mime_type)
            text = self._call_model(image_b64, mime_type)
            result = parse_scan_json(text)
            logger.info("Receipt read: {} - {} ({})", result.merchant, result.amount, result.category.short_label)
            return result
        except Exception as e:
            logger.error(f"Receipt scan error: {str(e)}")
            return failed_scan_result()

    @abc.abstractmethod
    def _call_model(self, image_b64: str, mime_type: str) -> Optional[str]:
        """Send the image to the model and return its raw text answer."""
        raise NotImplementedError


class AzureReceiptAnalyzer(BaseAnalyzer):
    """Reads receipts with an Azure OpenAI vision deployment through LangChain."""

    def __init__(self, settings: Settings, llm=None):
        self.settings = settings
        self.prompt = build_receipt_prompt(settings.note_language)
        self._llm = llm

    @property
    def llm(self):
        # built on first scan, inside analyze()'s error handling
        if self._llm is None:
            self._llm = AzureChatOpenAI(
                azure_endpoint=self.settings.azure_endpoint,
                api_key=self.settings.azure_api_key,
                api_version=self.settings.azure_api_version,
                deployment_name=self.settings.azure_deployment,
                temperature=0.0,
            ).bind(response_format=RESPONSE_FORMAT)
        return self._llm

    def _call_model(self, image_b64: str, mime_type: str) -> Optional[str]:
        message = HumanMessage(
            content=[
                {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{image_b64}"}},
                {"type": "text", "text": self.prompt},
            ]
        )
        content = self.llm.invoke([message]).content
        if not isinstance(content, str):
            raise AnalyzerError(f"Unexpected response content type: {type(content).__name__}")
        return content


DEMO_RECEIPT = {
    "merchant": "OfficeMate Online",
    "amount": 1250.00,
    "category": Category.OFFICE_SUPPLIES.value,
    "taxId": "0107542000011",
    "address": "24 ถนนสีลม แขวงสุริยวงศ์ เขตบางรัก กทม.",
    "note": "สั่งซื้อกระดาษ A4 และหมึกพิมพ์สำหรับสำนักงาน",
}


class DemoReceiptAnalyzer(BaseAnalyzer):
    """Stand-in used when no API key is configured: waits, then returns a sample receipt."""

    def __init__(self, delay: float = 2.5, sleep: Callable[[float], None] = time.sleep):
        self.delay = delay
        self.sleep = sleep

    def _call_model(self, image_b64: str, mime_type: str) -> Optional[str]:
        self.sleep(self.delay)
        return json.dumps({**DEMO_RECEIPT, "date": today_iso()}, ensure_ascii=False)


def build_analyzer(settings: Settings) -> BaseAnalyzer:
    if not settings.has_credentials:
        logger.warning("No AZURE_OPENAI_KEY found. Using demo receipt data.")
        return DemoReceiptAnalyzer(delay=settings.demo_delay)
    return AzureReceiptAnalyzer(settings)
