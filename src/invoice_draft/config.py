"""
Settings for the invoice draft core.

Values are read once from the environment at import time. Only defaults
for new documents and logging are configurable; the computation rules
themselves are fixed.
"""

import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Defaults for a freshly created invoice
DEFAULT_CURRENCY = os.getenv("INVOICE_DRAFT_CURRENCY", "USD")
DEFAULT_INVOICE_NUMBER = "1"
DUE_DAYS = int(os.getenv("INVOICE_DRAFT_DUE_DAYS", "30"))
