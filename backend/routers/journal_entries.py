from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
import logging
from database import get_db
from models.journal_entry import JournalSourceType
from schemas.journal_entry import JournalEntry, JournalEntrySummary, JournalEntryCreate
from crud import journal_entry as journal_entry_crud
from utils.request_context import get_user_id

router = APIRouter(
    prefix="/api/journal-entries",
    tags=["Journal Entries"],
)
logger = logging.getLogger("journal_entries")

@router.post("", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
def create_journal_entry(
    entry: JournalEntryCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    """
    Create a posted manual journal entry and apply it to account balances.
    Unbalanced entries, unknown accounts and dates in a closed period are rejected with 400.
    """
    try:
        return journal_entry_crud.create_journal_entry(db=db, entry=entry, user_id=user_id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        db.rollback()
        logger.exception("Unexpected error creating journal entry")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred.")

@router.get("", response_model=List[JournalEntrySummary])
def get_journal_entries(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    source_type: Optional[JournalSourceType] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """
    Retrieve journal entries, newest first.
    """
    return journal_entry_crud.get_journal_entries(
        db=db,
        start_date=start_date,
        end_date=end_date,
        source_type=source_type,
        skip=skip,
        limit=limit
    )

@router.get("/{entry_id}", response_model=JournalEntry)
def get_journal_entry(entry_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a single journal entry with its lines.
    """
    db_entry = journal_entry_crud.get_journal_entry(db=db, entry_id=entry_id)
    if db_entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    return db_entry
