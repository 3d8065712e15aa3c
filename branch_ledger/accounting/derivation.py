"""Derived-field rules applied to every receivable and payable before persistence."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from branch_ledger.schemas.common import ZERO
from branch_ledger.schemas.payable import PayableDraft, PayableInput
from branch_ledger.schemas.receivable import Payment, ReceivableDraft, ReceivableInput


@dataclass(frozen=True)
class ReceivableAmounts:
    total_owed: Decimal
    total_paid: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class PayableAmounts:
    total_charged: Decimal
    remaining_debt: Decimal
    remaining_advance: Decimal


def receivable_amounts(
    prior_amount: Decimal,
    current_charge: Decimal,
    cash: Decimal,
    bank_transfer: Decimal,
    card: Decimal,
) -> ReceivableAmounts:
    """Compute owed/paid/remaining; remaining goes negative on over-payment."""

    total_owed = prior_amount + current_charge
    total_paid = cash + bank_transfer + card
    return ReceivableAmounts(
        total_owed=total_owed,
        total_paid=total_paid,
        remaining_balance=total_owed - total_paid,
    )


def payable_amounts(prior_carry: Decimal, current_charge: Decimal, amount_paid: Decimal) -> PayableAmounts:
    """Split the unsettled difference into either remaining debt or remaining advance."""

    total_charged = prior_carry + current_charge
    difference = total_charged - amount_paid
    if difference >= 0:
        return PayableAmounts(total_charged=total_charged, remaining_debt=difference, remaining_advance=ZERO)
    return PayableAmounts(total_charged=total_charged, remaining_debt=ZERO, remaining_advance=abs(difference))


def derive_receivable(payload: ReceivableInput, default_branch: str) -> ReceivableDraft:
    """Fill defaults and recompute every derived receivable field from the submitted inputs."""

    amounts = receivable_amounts(
        payload.prior.amount,
        payload.current_charge,
        payload.payment.cash,
        payload.payment.bank_transfer,
        payload.payment.card,
    )
    return ReceivableDraft(
        client_name=payload.client_name,
        tax_id=payload.tax_id,
        phone=payload.phone,
        contact_name=payload.contact_name,
        service_type=payload.service_type,
        branch=payload.branch or default_branch,
        workforce_segment=payload.workforce_segment,
        prior=payload.prior,
        current_charge=payload.current_charge,
        total_owed=amounts.total_owed,
        payment=Payment(
            cash=payload.payment.cash,
            bank_transfer=payload.payment.bank_transfer,
            card=payload.payment.card,
            total=amounts.total_paid,
        ),
        remaining_balance=amounts.remaining_balance,
    )


def derive_payable(
    payload: PayableInput,
    default_branch: str,
    default_date: str,
    rolled_period: Optional[str] = None,
) -> PayableDraft:
    """Fill defaults and recompute every derived payable field from the submitted inputs."""

    amounts = payable_amounts(payload.prior_carry, payload.current_charge, payload.amount_paid)
    return PayableDraft(
        date=payload.date or default_date,
        payee_name=payload.payee_name,
        branch=payload.branch or default_branch,
        category=payload.category,
        prior_carry=payload.prior_carry,
        current_charge=payload.current_charge,
        total_charged=amounts.total_charged,
        amount_paid=payload.amount_paid,
        remaining_debt=amounts.remaining_debt,
        remaining_advance=amounts.remaining_advance,
        rolled_period=rolled_period,
    )
