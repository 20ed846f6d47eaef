import json
import logging
import os
from functools import lru_cache

logger = logging.getLogger("financial_data")

EMPTY_FINANCIAL_DATA = {"accounts": [], "expenses": [], "purchases": [], "dueInvoices": []}


@lru_cache(maxsize=1)
def load_financial_data() -> dict:
    """Load the static financial fixture used by the customer-balance and cash-flow reports.

    The file is read once per process. A missing or unreadable file yields an empty
    data set so the reports degrade to zeroes instead of failing.
    """
    path = os.getenv("FINANCIAL_DATA_PATH", "data.json")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Financial data fixture not loaded from {path}: {e}")
        return dict(EMPTY_FINANCIAL_DATA)

    return {key: data.get(key) or [] for key in EMPTY_FINANCIAL_DATA}
