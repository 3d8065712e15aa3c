"""Create kirim_data and chiqim_data ledger tables.

Revision ID: 0001_initial_ledger
Revises:
Create Date: 2026-10-01 00:00:00
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial_ledger"
down_revision = None
branch_labels = None
depends_on = None


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(20, 2), nullable=False, server_default="0")


def upgrade() -> None:
    op.create_table(
        "kirim_data",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("korxona_nomi", sa.String(length=256), nullable=False),
        sa.Column("inn", sa.String(length=32), nullable=False),
        sa.Column("tel_raqami", sa.String(length=32), nullable=False),
        sa.Column("ismi", sa.String(length=128), nullable=False),
        sa.Column("xizmat_turi", sa.String(length=128), nullable=False),
        sa.Column("filial_nomi", sa.String(length=64), nullable=False),
        sa.Column("ishchilar_kesimi", sa.String(length=256), nullable=False),
        sa.Column("oldingi_oylar_soni", sa.Integer(), nullable=False, server_default="0"),
        _money("oldingi_oylar_summasi"),
        _money("bir_oylik_hisoblangan_summa"),
        _money("jami_qarz_dorlik"),
        _money("tolandi_jami"),
        _money("tolandi_naqd"),
        _money("tolandi_prechisleniya"),
        _money("tolandi_karta"),
        _money("qoldiq"),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("oldingi_oylar_soni >= 0", name=op.f("ck_kirim_data_months_count_non_negative")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_kirim_data")),
    )
    op.create_index(op.f("ix_kirim_data_inn"), "kirim_data", ["inn"], unique=False)
    op.create_index(op.f("ix_kirim_data_filial_nomi"), "kirim_data", ["filial_nomi"], unique=False)
    op.create_index(op.f("ix_kirim_data_last_updated"), "kirim_data", ["last_updated"], unique=False)
    op.create_index(op.f("ix_kirim_data_created_at"), "kirim_data", ["created_at"], unique=False)
    op.create_index("ix_kirim_data_filial_last_updated", "kirim_data", ["filial_nomi", "last_updated"], unique=False)

    op.create_table(
        "chiqim_data",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sana", sa.String(length=10), nullable=False),
        sa.Column("nomi", sa.String(length=256), nullable=False),
        sa.Column("filial_nomi", sa.String(length=64), nullable=False),
        sa.Column("chiqim_nomi", sa.String(length=128), nullable=False),
        _money("avvalgi_oylardan"),
        _money("bir_oylik_hisoblangan"),
        _money("jami_hisoblangan"),
        _money("tolangan"),
        _money("qoldiq_qarz_dorlik"),
        _money("qoldiq_avans"),
        sa.Column("rolled_period", sa.String(length=7), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint(
            "qoldiq_qarz_dorlik = 0 OR qoldiq_avans = 0",
            name=op.f("ck_chiqim_data_debt_advance_exclusive"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_chiqim_data")),
    )
    op.create_index(op.f("ix_chiqim_data_filial_nomi"), "chiqim_data", ["filial_nomi"], unique=False)
    op.create_index(op.f("ix_chiqim_data_created_at"), "chiqim_data", ["created_at"], unique=False)
    op.create_index("ix_chiqim_data_filial_created", "chiqim_data", ["filial_nomi", "created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_chiqim_data_filial_created", table_name="chiqim_data")
    op.drop_index(op.f("ix_chiqim_data_created_at"), table_name="chiqim_data")
    op.drop_index(op.f("ix_chiqim_data_filial_nomi"), table_name="chiqim_data")
    op.drop_table("chiqim_data")

    op.drop_index("ix_kirim_data_filial_last_updated", table_name="kirim_data")
    op.drop_index(op.f("ix_kirim_data_created_at"), table_name="kirim_data")
    op.drop_index(op.f("ix_kirim_data_last_updated"), table_name="kirim_data")
    op.drop_index(op.f("ix_kirim_data_filial_nomi"), table_name="kirim_data")
    op.drop_index(op.f("ix_kirim_data_inn"), table_name="kirim_data")
    op.drop_table("kirim_data")
