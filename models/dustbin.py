import enum
from decimal import Decimal

from sqlalchemy import Enum, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin

ADDRESS_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 1000


class DustbinStatus(str, enum.Enum):
    ACTIVE = "active"
    FULL = "full"
    DAMAGED = "damaged"
    REMOVED = "removed"


class Dustbin(Base, TimestampMixin):
    __tablename__ = "dustbins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    latitude: Mapped[Decimal] = mapped_column(Numeric(10, 8), nullable=False)
    longitude: Mapped[Decimal] = mapped_column(Numeric(11, 8), nullable=False)
    address: Mapped[str | None] = mapped_column(String(ADDRESS_MAX_LENGTH), nullable=True)
    description: Mapped[str | None] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    status: Mapped[DustbinStatus] = mapped_column(
        Enum(
            DustbinStatus,
            name="dustbin_status",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
            validate_strings=True,
        ),
        default=DustbinStatus.ACTIVE,
        server_default=DustbinStatus.ACTIVE.value,
        nullable=False,
    )
    reported_by: Mapped[str | None] = mapped_column(Text, nullable=True)


Index("idx_dustbins_status_created_at", Dustbin.status, Dustbin.created_at.desc())
