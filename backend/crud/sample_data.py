import logging
from datetime import timedelta
from sqlalchemy.orm import Session
from models.chart_of_accounts import Account
from models.journal_entry import JournalEntry
from models.journal_entry_line import JournalEntryLine
from models.audit_mixin import local_now
from crud.chart_of_accounts import ACCOUNT_CODES, seed_default_accounts, get_account_id_by_code
from crud.accounting_integration import create_manual_journal_entry, update_account_balances

logger = logging.getLogger("sample_data")

SAMPLE_ENTRIES = [
    ("SALE-001", "Product sales to Cairo Medical Center", "ACCOUNTS_RECEIVABLE", "SALES_REVENUE", "15000.00"),
    ("PUR-001", "Raw materials purchase from ChemCorp", "INVENTORY", "ACCOUNTS_PAYABLE", "8500.00"),
    ("UTIL-001", "Monthly utility bill payment", "UTILITIES", "CASH", "2500.00"),
]

def generate_sample_data(db: Session, user_id: int) -> dict:
    """Wipe the ledger and chart of accounts, reseed it and post three sample entries."""
    db.query(JournalEntryLine).delete(synchronize_session=False)
    db.query(JournalEntry).delete(synchronize_session=False)
    db.query(Account).update({Account.parent_id: None}, synchronize_session=False)
    db.query(Account).delete(synchronize_session=False)
    db.flush()

    accounts_created = seed_default_accounts(db, commit=False)

    today = local_now().date()
    lines_created = 0
    for offset, (reference, memo, debit_key, credit_key, amount) in enumerate(SAMPLE_ENTRIES):
        lines = [
            {"account_id": get_account_id_by_code(db, ACCOUNT_CODES[debit_key]), "debit": amount, "description": memo},
            {"account_id": get_account_id_by_code(db, ACCOUNT_CODES[credit_key]), "credit": amount, "description": memo},
        ]
        entry = create_manual_journal_entry(
            db,
            entry_date=today - timedelta(days=len(SAMPLE_ENTRIES) - 1 - offset),
            reference=reference,
            memo=memo,
            lines=lines,
            user_id=user_id,
        )
        update_account_balances(db, entry.id)
        lines_created += len(lines)

    db.commit()
    logger.info(f"Generated sample accounting data: {accounts_created} accounts, {len(SAMPLE_ENTRIES)} entries")
    return {
        "message": "Sample accounting data generated successfully",
        "accounts_created": accounts_created,
        "journal_entries_created": len(SAMPLE_ENTRIES),
        "journal_lines_created": lines_created,
    }
