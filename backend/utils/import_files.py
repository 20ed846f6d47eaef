import io
import logging
import pandas as pd

logger = logging.getLogger("import_files")

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xls", ".json")


def read_import_file(filename: str, content: bytes) -> list:
    """Parse an uploaded CSV, Excel or JSON file into a list of row dicts.

    Empty cells come back as None rather than NaN.
    """
    name = (filename or "").lower()
    buffer = io.BytesIO(content)

    if name.endswith(".csv"):
        df = pd.read_csv(buffer, dtype=str)
    elif name.endswith((".xlsx", ".xls")):
        df = pd.read_excel(buffer, dtype=str)
    elif name.endswith(".json"):
        df = pd.read_json(buffer, dtype=False)
    else:
        raise ValueError(f"Unsupported file type. Upload one of: {', '.join(SUPPORTED_EXTENSIONS)}")

    df = df.astype(object).where(pd.notna(df), None)
    rows = df.to_dict(orient="records")
    logger.info(f"Parsed {len(rows)} rows from {filename}")
    return rows
