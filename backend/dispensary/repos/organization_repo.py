"""
SQLAlchemy-based Organization repository.

Operations:
- list_with_member_counts(): every organization with its member count
- get_by_slug(slug)
- create_organization(name, slug=None): slug generated from the name when omitted
- add_member(organization_id, user_id, role="MEMBER")
"""

from __future__ import annotations

import re
import unicodedata
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dispensary.core.contracts import OrganizationSummary
from dispensary.models.organization import Organization
from dispensary.models.organization_member import MEMBER_ROLES, OrganizationMember


__all__ = ["SqlAlchemyOrganizationRepo", "slugify"]


def slugify(name: str) -> str:
    """
    Convert a name into a URL-safe slug: accents stripped, lowercase,
    alphanumerics and hyphens only.
    """
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    base = re.sub(r"[^a-zA-Z0-9]+", "-", ascii_name).strip("-").lower()
    return base or "organization"


class SqlAlchemyOrganizationRepo:
    """
    Organization repository bound to a caller-provided Session.
    """

    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    # -------------------------------
    # Reads
    # -------------------------------

    def list_with_member_counts(self) -> List[OrganizationSummary]:
        """
        One row per organization; organizations without members count 0.
        """
        member_count = func.count(OrganizationMember.id).label("member_count")
        stmt = (
            select(
                Organization.id,
                Organization.name,
                Organization.slug,
                Organization.created_at,
                member_count,
            )
            .outerjoin(OrganizationMember, OrganizationMember.organization_id == Organization.id)
            .group_by(Organization.id, Organization.name, Organization.slug, Organization.created_at)
            .order_by(Organization.name.asc(), Organization.id.asc())
        )
        return [
            OrganizationSummary(
                id=row.id,
                name=row.name,
                slug=row.slug,
                created_at=row.created_at,
                member_count=int(row.member_count or 0),
            )
            for row in self.session.execute(stmt)
        ]

    def get_by_slug(self, slug: str) -> Optional[Organization]:
        stmt = select(Organization).where(Organization.slug == slug)
        return self.session.execute(stmt).scalars().first()

    # -------------------------------
    # Writes (seed tooling)
    # -------------------------------

    def create_organization(self, name: str, slug: Optional[str] = None) -> Organization:
        """
        Create an organization. Without an explicit slug one is generated from
        the name and made unique with a numeric suffix.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("name must be a non-empty string")

        if slug is None:
            base = slugify(name)
            slug = base
            idx = 2
            while self.get_by_slug(slug) is not None:
                slug = f"{base}-{idx}"
                idx += 1
        elif not slug.strip():
            raise ValueError("slug must be a non-empty string")

        org = Organization(name=name.strip(), slug=slug.strip())
        self.session.add(org)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Organization creation failed due to uniqueness constraint") from exc
        self.session.refresh(org)
        return org

    def add_member(self, organization_id: int, user_id: str, role: str = "MEMBER") -> OrganizationMember:
        if role not in MEMBER_ROLES:
            raise ValueError(f"role must be one of {', '.join(MEMBER_ROLES)}")
        if not isinstance(user_id, str) or not user_id.strip():
            raise ValueError("user_id must be a non-empty string")

        member = OrganizationMember(organization_id=organization_id, user_id=user_id.strip(), role=role)
        self.session.add(member)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Membership creation failed (unknown organization or duplicate member)") from exc
        self.session.refresh(member)
        return member
