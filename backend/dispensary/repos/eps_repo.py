"""
SQLAlchemy-based EPS repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dispensary.models.eps import Eps


__all__ = ["SqlAlchemyEpsRepo"]


class SqlAlchemyEpsRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def list_active(self) -> List[Eps]:
        stmt = select(Eps).where(Eps.is_active.is_(True)).order_by(Eps.name.asc(), Eps.id.asc())
        return list(self.session.execute(stmt).scalars().all())

    def get_by_code(self, code: str, organization_id: Optional[int] = None) -> Optional[Eps]:
        stmt = select(Eps).where(Eps.code == code)
        if organization_id is None:
            stmt = stmt.where(Eps.organization_id.is_(None))
        else:
            stmt = stmt.where(Eps.organization_id == organization_id)
        return self.session.execute(stmt).scalars().first()

    def create_eps(
        self,
        *,
        code: str,
        name: str,
        organization_id: Optional[int] = None,
        has_api: bool = False,
        api_endpoint: Optional[str] = None,
        is_active: bool = True,
    ) -> Eps:
        if not isinstance(code, str) or not code.strip():
            raise ValueError("code must be a non-empty string")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("name must be a non-empty string")
        # NULL organization ids never collide in the unique constraint
        if self.get_by_code(code.strip(), organization_id) is not None:
            raise ValueError("An EPS with this code already exists")

        eps = Eps(
            organization_id=organization_id,
            code=code.strip(),
            name=name.strip(),
            has_api=bool(has_api),
            api_endpoint=api_endpoint,
            is_active=bool(is_active),
        )
        self.session.add(eps)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("An EPS with this code already exists") from exc
        self.session.refresh(eps)
        return eps
