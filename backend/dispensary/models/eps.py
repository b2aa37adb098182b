"""
EPS model.

An EPS (Entidad Promotora de Salud) is a health-insurance provider whose
affiliates are dispensed medication. Records are deactivated, never deleted.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, func, text
from sqlalchemy.orm import Mapped, mapped_column

from dispensary.db.base import Base


class Eps(Base):
    __tablename__ = "eps"
    __table_args__ = (
        UniqueConstraint("organization_id", "code", name="uq_eps_organization_code"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Owning organization; NULL for records shared across organizations
    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organization.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    code: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Eligibility lookups through the insurer's own API
    has_api: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    api_endpoint: Mapped[str | None] = mapped_column(String(512), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Eps id={self.id!r} code={self.code!r} active={self.is_active!r}>"
