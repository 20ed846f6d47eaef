from sqlalchemy.orm import Session
from models.journal_entry import JournalEntry, JournalSourceType
from schemas.journal_entry import JournalEntryCreate
from crud.accounting_integration import create_manual_journal_entry, update_account_balances
from typing import Optional
from datetime import date

def create_journal_entry(db: Session, entry: JournalEntryCreate, user_id: int):
    """
    Creates a posted manual journal entry and applies it to account balances.
    """
    db_entry = create_manual_journal_entry(
        db,
        entry_date=entry.date,
        reference=entry.reference,
        memo=entry.memo,
        lines=[line.model_dump() for line in entry.lines],
        user_id=user_id,
    )
    update_account_balances(db, db_entry.id)
    db.commit()
    db.refresh(db_entry)
    return db_entry

def get_journal_entry(db: Session, entry_id: int):
    """
    Retrieves a single journal entry by its ID.
    """
    return db.query(JournalEntry).filter(JournalEntry.id == entry_id).first()

def get_journal_entry_by_number(db: Session, entry_number: str):
    return db.query(JournalEntry).filter(JournalEntry.entry_number == entry_number).first()

def get_journal_entries(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    source_type: Optional[JournalSourceType] = None,
    skip: int = 0,
    limit: int = 100
):
    """
    Retrieves a list of journal entries with optional date and source filtering.
    """
    query = db.query(JournalEntry)

    if start_date:
        query = query.filter(JournalEntry.date >= start_date)
    if end_date:
        query = query.filter(JournalEntry.date <= end_date)
    if source_type:
        query = query.filter(JournalEntry.source_type == source_type)

    return query.order_by(JournalEntry.date.desc(), JournalEntry.id.desc()).offset(skip).limit(limit).all()
