"""Field renaming between domain schemas and ledger table columns."""

from __future__ import annotations

from typing import Any

from branch_ledger.database.models import Payable, Receivable
from branch_ledger.schemas.payable import PayableDraft, PayableRecord
from branch_ledger.schemas.receivable import Payment, PriorCarryInput, ReceivableDraft, ReceivableRecord


def receivable_columns(draft: ReceivableDraft) -> dict[str, Any]:
    """Flatten a receivable into ``kirim_data`` column values."""

    return {
        "korxona_nomi": draft.client_name,
        "inn": draft.tax_id,
        "tel_raqami": draft.phone,
        "ismi": draft.contact_name,
        "xizmat_turi": draft.service_type,
        "filial_nomi": draft.branch,
        "ishchilar_kesimi": draft.workforce_segment,
        "oldingi_oylar_soni": draft.prior.months_count,
        "oldingi_oylar_summasi": draft.prior.amount,
        "bir_oylik_hisoblangan_summa": draft.current_charge,
        "jami_qarz_dorlik": draft.total_owed,
        "tolandi_jami": draft.payment.total,
        "tolandi_naqd": draft.payment.cash,
        "tolandi_prechisleniya": draft.payment.bank_transfer,
        "tolandi_karta": draft.payment.card,
        "qoldiq": draft.remaining_balance,
    }


def receivable_from_row(row: Receivable) -> ReceivableRecord:
    """Rebuild a receivable record from a ``kirim_data`` row."""

    return ReceivableRecord(
        id=row.id,
        client_name=row.korxona_nomi,
        tax_id=row.inn,
        phone=row.tel_raqami,
        contact_name=row.ismi,
        service_type=row.xizmat_turi,
        branch=row.filial_nomi,
        workforce_segment=row.ishchilar_kesimi or "",
        prior=PriorCarryInput(months_count=row.oldingi_oylar_soni, amount=row.oldingi_oylar_summasi),
        current_charge=row.bir_oylik_hisoblangan_summa,
        total_owed=row.jami_qarz_dorlik,
        payment=Payment(
            total=row.tolandi_jami,
            cash=row.tolandi_naqd,
            bank_transfer=row.tolandi_prechisleniya,
            card=row.tolandi_karta,
        ),
        remaining_balance=row.qoldiq,
        last_updated=row.last_updated,
        created_at=row.created_at,
    )


def payable_columns(draft: PayableDraft) -> dict[str, Any]:
    """Flatten a payable into ``chiqim_data`` column values.

    ``rolled_period`` is only written when set, so ordinary edits keep the
    period the record was last rolled into.
    """

    columns: dict[str, Any] = {
        "sana": draft.date,
        "nomi": draft.payee_name,
        "filial_nomi": draft.branch,
        "chiqim_nomi": draft.category,
        "avvalgi_oylardan": draft.prior_carry,
        "bir_oylik_hisoblangan": draft.current_charge,
        "jami_hisoblangan": draft.total_charged,
        "tolangan": draft.amount_paid,
        "qoldiq_qarz_dorlik": draft.remaining_debt,
        "qoldiq_avans": draft.remaining_advance,
    }
    if draft.rolled_period is not None:
        columns["rolled_period"] = draft.rolled_period
    return columns


def payable_from_row(row: Payable) -> PayableRecord:
    """Rebuild a payable record from a ``chiqim_data`` row."""

    return PayableRecord(
        id=row.id,
        date=row.sana,
        payee_name=row.nomi,
        branch=row.filial_nomi,
        category=row.chiqim_nomi,
        prior_carry=row.avvalgi_oylardan,
        current_charge=row.bir_oylik_hisoblangan,
        total_charged=row.jami_hisoblangan,
        amount_paid=row.tolangan,
        remaining_debt=row.qoldiq_qarz_dorlik,
        remaining_advance=row.qoldiq_avans,
        rolled_period=row.rolled_period,
        created_at=row.created_at,
    )
