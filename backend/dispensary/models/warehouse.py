"""
Warehouse model (bodega).

Warehouses serving an EPS carry the EPS code as a prefix of their own code.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dispensary.db.base import Base


WAREHOUSE_TYPES = ("PRINCIPAL", "DISPENSARIO", "EPS")


class Warehouse(Base):
    __tablename__ = "warehouse"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # One of WAREHOUSE_TYPES
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="PRINCIPAL", server_default="PRINCIPAL")

    eps_id: Mapped[int | None] = mapped_column(
        ForeignKey("eps.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    eps: Mapped[Optional["Eps"]] = relationship("Eps")

    def __repr__(self) -> str:
        return f"<Warehouse id={self.id!r} code={self.code!r} type={self.type!r}>"
