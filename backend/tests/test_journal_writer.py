from datetime import date
from decimal import Decimal

import pytest

from crud.accounting_integration import (
    ClosedPeriodError,
    MissingAccountError,
    UnbalancedJournalEntryError,
    create_invoice_journal_entry,
    create_manual_journal_entry,
    generate_journal_entry_number,
    generate_refund_entry_number,
    post_side_effect_entry,
    update_account_balances,
)
from crud.chart_of_accounts import get_account_by_code, get_account_id_by_code
from models.accounting_periods import AccountingPeriod
from models.journal_entry import JournalEntry, JournalEntryStatus
from models.sales import Sale
from models.audit_mixin import local_now


def _sale(db, grand_total="114.00", tax="14.00"):
    sale = Sale(
        invoice_number="INV-TEST-1",
        user_id=1,
        total_amount=Decimal(grand_total) - Decimal(tax),
        subtotal=Decimal(grand_total) - Decimal(tax),
        tax=Decimal(tax),
        grand_total=Decimal(grand_total),
        payment_status="pending",
    )
    db.add(sale)
    db.commit()
    return sale


def test_manual_entry_is_posted_with_ordered_lines(seeded):
    db = seeded
    cash = get_account_id_by_code(db, "1100")
    equity = get_account_id_by_code(db, "3000")

    entry = create_manual_journal_entry(
        db, date(2026, 10, 5), "CAP-1", "Owner capital",
        [{"account_id": cash, "debit": "1000"}, {"account_id": equity, "credit": "1000"}],
        user_id=1,
    )
    db.commit()

    assert entry.entry_number == f"JE-{local_now():%Y%m}-0001"
    assert entry.status == JournalEntryStatus.POSTED
    assert entry.total_debit == entry.total_credit == Decimal("1000.00")
    assert [line.position for line in entry.lines] == [1, 2]


def test_unbalanced_entry_is_rejected(seeded):
    db = seeded
    cash = get_account_id_by_code(db, "1100")
    equity = get_account_id_by_code(db, "3000")

    with pytest.raises(UnbalancedJournalEntryError):
        create_manual_journal_entry(
            db, date(2026, 10, 5), None, None,
            [{"account_id": cash, "debit": "100"}, {"account_id": equity, "credit": "99.99"}],
            user_id=1,
        )
    db.rollback()
    assert db.query(JournalEntry).count() == 0


def test_single_line_entry_is_rejected(seeded):
    cash = get_account_id_by_code(seeded, "1100")
    with pytest.raises(UnbalancedJournalEntryError):
        create_manual_journal_entry(seeded, date(2026, 10, 5), None, None, [{"account_id": cash, "debit": "5"}], 1)


def test_invoice_entry_splits_revenue_and_tax(seeded):
    db = seeded
    sale = _sale(db)

    entry = create_invoice_journal_entry(db, sale, "Cairo Medical Center", user_id=1)
    update_account_balances(db, entry.id)
    db.commit()

    amounts = {(line.account.code, line.debit, line.credit) for line in entry.lines}
    assert amounts == {
        ("1200", Decimal("114.00"), Decimal("0.00")),
        ("4100", Decimal("0.00"), Decimal("100.00")),
        ("2200", Decimal("0.00"), Decimal("14.00")),
    }
    assert get_account_by_code(db, "1200").balance == Decimal("114.00")
    assert get_account_by_code(db, "4100").balance == Decimal("-100.00")
    assert get_account_by_code(db, "2200").balance == Decimal("-14.00")


def test_invoice_without_tax_has_two_lines(seeded):
    sale = _sale(seeded, grand_total="50.00", tax="0")
    entry = create_invoice_journal_entry(seeded, sale, "Walk-in", user_id=1)
    assert len(entry.lines) == 2


def test_missing_account_raises(db):
    sale = _sale(db)
    with pytest.raises(MissingAccountError):
        create_invoice_journal_entry(db, sale, "Cairo Medical Center", user_id=1)


def test_side_effect_failure_is_swallowed_and_rolled_back(db):
    sale = _sale(db)

    entry = post_side_effect_entry(db, "invoice INV-TEST-1", create_invoice_journal_entry, sale, "Cairo", 1)

    assert entry is None
    assert db.query(JournalEntry).count() == 0
    assert db.query(Sale).count() == 1


def test_closed_period_rejects_posting(seeded):
    db = seeded
    db.add(AccountingPeriod(period_name="Q1 2026", start_date=date(2026, 1, 1), end_date=date(2026, 3, 31), status="closed"))
    db.commit()
    cash = get_account_id_by_code(db, "1100")
    equity = get_account_id_by_code(db, "3000")

    with pytest.raises(ClosedPeriodError):
        create_manual_journal_entry(
            db, date(2026, 2, 14), None, None,
            [{"account_id": cash, "debit": "10"}, {"account_id": equity, "credit": "10"}],
            user_id=1,
        )


def test_balance_updater_applies_debit_minus_credit(seeded):
    db = seeded
    cash = get_account_id_by_code(db, "1100")
    utilities = get_account_id_by_code(db, "6300")

    for amount in ("300", "200"):
        entry = create_manual_journal_entry(
            db, date(2026, 10, 1), None, None,
            [{"account_id": utilities, "debit": amount}, {"account_id": cash, "credit": amount}],
            user_id=1,
        )
        update_account_balances(db, entry.id)
    db.commit()

    assert get_account_by_code(db, "6300").balance == Decimal("500.00")
    assert get_account_by_code(db, "1100").balance == Decimal("-500.00")


def test_entry_numbers_are_sequential_per_series(seeded):
    db = seeded
    cash = get_account_id_by_code(db, "1100")
    equity = get_account_id_by_code(db, "3000")
    on = local_now().date()
    month = f"{on:%Y%m}"

    assert generate_journal_entry_number(db, on) == f"JE-{month}-0001"
    create_manual_journal_entry(
        db, on, None, None,
        [{"account_id": cash, "debit": "1"}, {"account_id": equity, "credit": "1"}],
        user_id=1,
    )
    assert generate_journal_entry_number(db, on) == f"JE-{month}-0002"
    assert generate_refund_entry_number(db, on) == f"REFUND-JE-{month}-0001"
