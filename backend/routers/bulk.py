from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session
import logging
from database import get_db
from schemas.bulk import BulkImportRequest, BulkImportResult, IMPORT_TYPES
from crud.bulk_import import import_rows
from utils.import_files import read_import_file

router = APIRouter(prefix="/api/bulk", tags=["Bulk Import"])
logger = logging.getLogger("bulk")

@router.post("/import-json", response_model=BulkImportResult)
def import_json(request: BulkImportRequest, db: Session = Depends(get_db)):
    return import_rows(db, request.type, request.data)

@router.post("/import", response_model=BulkImportResult)
def import_file(
    file: UploadFile = File(...),
    type: str = Form(...),
    db: Session = Depends(get_db)
):
    """Upsert products, customers or suppliers from an uploaded CSV, Excel or JSON file."""
    if type not in IMPORT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid import type. Must be one of {list(IMPORT_TYPES)}"
        )
    content = file.file.read()
    try:
        rows = read_import_file(file.filename, content)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info(f"Importing {len(rows)} {type} rows from {file.filename}")
    return import_rows(db, type, rows)
