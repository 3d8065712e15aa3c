
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from branch_ledger.database.base import Base

MONEY = Numeric(20, 2)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Receivable(Base):
    """Client service line owed to the business (kirim)."""

    __tablename__ = "kirim_data"
    __table_args__ = (
        CheckConstraint("oldingi_oylar_soni >= 0", name="months_count_non_negative"),
        Index("ix_kirim_data_filial_last_updated", "filial_nomi", "last_updated"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    korxona_nomi: Mapped[str] = mapped_column(String(256), default="")
    inn: Mapped[str] = mapped_column(String(32), default="", index=True)
    tel_raqami: Mapped[str] = mapped_column(String(32), default="")
    ismi: Mapped[str] = mapped_column(String(128), default="")
    xizmat_turi: Mapped[str] = mapped_column(String(128), default="")
    filial_nomi: Mapped[str] = mapped_column(String(64), index=True)
    ishchilar_kesimi: Mapped[str] = mapped_column(String(256), default="")
    oldingi_oylar_soni: Mapped[int] = mapped_column(Integer, default=0)
    oldingi_oylar_summasi: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    bir_oylik_hisoblangan_summa: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    jami_qarz_dorlik: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    tolandi_jami: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    tolandi_naqd: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    tolandi_prechisleniya: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    tolandi_karta: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    qoldiq: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)


class Payable(Base):
    """Expense line owed by the business to a payee (chiqim)."""

    __tablename__ = "chiqim_data"
    __table_args__ = (
        CheckConstraint(
            "qoldiq_qarz_dorlik = 0 OR qoldiq_avans = 0",
            name="debt_advance_exclusive",
        ),
        Index("ix_chiqim_data_filial_created", "filial_nomi", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sana: Mapped[str] = mapped_column(String(10))
    nomi: Mapped[str] = mapped_column(String(256), default="")
    filial_nomi: Mapped[str] = mapped_column(String(64), index=True)
    chiqim_nomi: Mapped[str] = mapped_column(String(128), default="")
    avvalgi_oylardan: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    bir_oylik_hisoblangan: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    jami_hisoblangan: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    tolangan: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    qoldiq_qarz_dorlik: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    qoldiq_avans: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"))
    rolled_period: Mapped[Optional[str]] = mapped_column(String(7), nullable=True, default=None)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
