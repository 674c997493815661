import math
import re
import time
import uuid
from datetime import date
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Corporate expense categories. The value is the label shown and sent to the sheet."""

    OFFICE_SUPPLIES = "Office Supplies (วัสดุสำนักงาน)"
    TRAVEL = "Travel & Transportation (ค่าเดินทาง)"
    MEALS = "Meals & Beverage (อาหารและเครื่องดื่ม)"
    ENTERTAINMENT = "Entertainment (ค่ารับรอง)"
    COMMUNICATION = "Communication & Internet (ค่าโทรศัพท์/เน็ต)"
    UTILITIES = "Utilities (สาธารณูปโภค)"
    SOFTWARE = "Software & Licenses (ค่าซอฟต์แวร์)"
    MARKETING = "Marketing (การตลาด/โฆษณา)"
    MAINTENANCE = "Repair & Maintenance (ค่าซ่อมแซม)"
    FEES = "Fees & Taxes (ค่าธรรมเนียม)"
    EQUIPMENT = "Equipment (อุปกรณ์)"
    OTHER = "Other (อื่นๆ)"

    @classmethod
    def labels(cls) -> list[str]:
        return [c.value for c in cls]

    @classmethod
    def from_label(cls, value: Union["Category", str, None]) -> "Category":
        """Resolve a label (or member); anything unknown is OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER

    @property
    def short_label(self) -> str:
        return self.value.split("(")[0].strip()


def today_iso() -> str:
    return date.today().isoformat()


_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(value) -> float:
    """Read an amount the way a browser number field does.

    Takes the leading numeric part of text ("150.50" -> 150.5, "12abc" -> 12.0).
    Anything unparseable or non-finite is 0.0. Sign is kept as typed.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_PREFIX.match(str(value).strip())
        if not match:
            return 0.0
        number = float(match.group())
    return number if math.isfinite(number) else 0.0


class ScanResult(BaseModel):
    """Fields read off one receipt, as held by the review form."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str = Field(default_factory=today_iso)
    merchant: str = ""
    amount: float = 0.0
    category: Category = Category.OTHER
    tax_id: str = Field(default="", alias="taxId")
    address: str = ""
    note: str = ""

    @classmethod
    def blank(cls) -> "ScanResult":
        return cls()


class Transaction(ScanResult):
    """A confirmed receipt. Never edited after creation."""

    id: str
    timestamp: int

    @classmethod
    def from_scan(cls, scan: ScanResult, now: Optional[float] = None) -> "Transaction":
        now = time.time() if now is None else now
        return cls(
            id=uuid.uuid4().hex,
            timestamp=int(now * 1000),
            **scan.model_dump(),
        )

    def webhook_payload(self, source: str) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "merchant": self.merchant,
            "amount": self.amount,
            "category": self.category.value,
            "timestamp": self.timestamp,
            "taxId": self.tax_id,
            "address": self.address,
            "note": self.note,
            "source": source,
        }
