from billscanner.models import Category

RECEIPT_PROMPT = """You are an expert Corporate Accountant. Analyze this receipt/invoice.

1. Extract merchant, date (YYYY-MM-DD), total amount, Tax ID, and Address.
2. INTELLIGENTLY CATEGORIZE based on the items and merchant nature:
   - Buying paper, pens, ink? -> Office Supplies.
   - Grab/Taxi/Flight? -> Travel.
   - Restaurant with many people? -> Entertainment.
   - Restaurant for one? -> Meals.
   - AWS, Google Cloud, Adobe? -> Software.
   - Internet or phone bill? -> Communication.
3. Generate a short 'note' in {note_language} summarizing what was paid for
   (e.g. a client dinner for project A, a cloud server subscription).

Return ONLY a JSON object matching the requested schema."""


def build_receipt_prompt(note_language: str = "Thai") -> str:
    return RECEIPT_PROMPT.format(note_language=note_language)


RECEIPT_SCHEMA = {
    "type": "object",
    "properties": {
        "merchant": {"type": "string", "description": "The name of the store or merchant."},
        "date": {"type": "string", "description": "Date in YYYY-MM-DD format."},
        "amount": {"type": "number", "description": "The total amount paid."},
        "category": {
            "type": "string",
            "enum": Category.labels(),
            "description": "The corporate accounting category of the expense.",
        },
        "taxId": {"type": "string", "description": "The Tax Identification Number if available."},
        "address": {"type": "string", "description": "The address of the merchant if available."},
        "note": {"type": "string", "description": "A short summary of the items bought."},
    },
    "required": ["merchant", "amount", "category", "note"],
}

RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "ReceiptScan",
        # strict mode would make every property required; category labels are
        # checked again by Category.from_label
        "strict": False,
        "schema": RECEIPT_SCHEMA,
    },
}
