from pydantic import BaseModel
from typing import Any, Dict, List, Literal

IMPORT_TYPES = ("products", "customers", "suppliers")

class BulkImportRequest(BaseModel):
    type: Literal["products", "customers", "suppliers"]
    data: List[Dict[str, Any]]

class BulkImportResult(BaseModel):
    success: bool = True
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = []
