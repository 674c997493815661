import json
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlsplit

import requests
from loguru import logger
from requests.exceptions import RequestException
from urllib3.exceptions import LocationParseError

from billscanner.config import DEFAULT_SOURCE_TAG
from billscanner.models import Transaction

# simple-request content type; the Apps Script endpoint gets no preflight
CONTENT_TYPE = "text/plain;charset=utf-8"


@dataclass(frozen=True)
class SyncDelivered:
    status_code: int


@dataclass(frozen=True)
class SyncFailed:
    reason: str


SyncResult = Union[SyncDelivered, SyncFailed]


def redact_url(url: str) -> str:
    """Only the host of a webhook URL is safe to log; the path is the secret."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid url>"
    return f"{parts.scheme}://{parts.netloc}/..." if parts.netloc else "<invalid url>"


class SheetSync:
    """Posts one confirmed transaction to a Google Apps Script web app."""

    def __init__(self, source: str = DEFAULT_SOURCE_TAG, timeout: Optional[float] = None, session=None):
        self.source = source
        self.timeout = timeout
        self.session = session or requests.Session()

    def push(self, url: str, transaction: Transaction) -> SyncResult:
        payload = json.dumps(transaction.webhook_payload(self.source), ensure_ascii=False)
        try:
            response = self.session.post(
                url,
                data=payload.encode("utf-8"),
                headers={"Content-Type": CONTENT_TYPE},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except (RequestException, LocationParseError, ValueError) as e:
            logger.error(f"Google Sheet sync error ({redact_url(url)}): {str(e)}")
            return SyncFailed(reason=str(e))

        logger.info("Transaction {} sent to sheet ({})", transaction.id, response.status_code)
        return SyncDelivered(status_code=response.status_code)


APPS_SCRIPT_TEMPLATE = """function doPost(e) {
  var sheet = SpreadsheetApp.getActiveSpreadsheet().getActiveSheet();
  var data = JSON.parse(e.postData.contents);

  sheet.appendRow([
    data.date,
    data.merchant,
    data.amount,
    data.category,
    data.taxId,
    data.address,
    data.note,
    new Date()
  ]);

  return ContentService.createTextOutput(JSON.stringify({result: 'success'}))
    .setMimeType(ContentService.MimeType.JSON);
}"""

SETUP_STEPS = [
    "Create a new Google Sheet > Extensions > Apps Script",
    "Delete the existing code and paste the script below",
    "Deploy > New deployment",
    "Select type: Web app",
    "Who has access: Anyone",
    "Copy the web app URL into the field above",
]
