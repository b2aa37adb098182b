"""
OrganizationMember model.

Membership of a user in an organization. Users themselves live in the
authentication service; only their opaque id is stored here.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dispensary.db.base import Base


MEMBER_ROLES = ("OWNER", "ADMIN", "MEMBER")


class OrganizationMember(Base):
    __tablename__ = "organization_member"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_member_org_user"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organization.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    # One of MEMBER_ROLES
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="MEMBER", server_default="MEMBER")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    organization: Mapped["Organization"] = relationship("Organization", back_populates="members")

    def __repr__(self) -> str:
        return (
            f"<OrganizationMember id={self.id!r} organization_id={self.organization_id!r} "
            f"user_id={self.user_id!r} role={self.role!r}>"
        )
