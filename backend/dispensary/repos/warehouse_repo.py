"""
SQLAlchemy-based Warehouse repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dispensary.models.warehouse import WAREHOUSE_TYPES, Warehouse


__all__ = ["SqlAlchemyWarehouseRepo"]


class SqlAlchemyWarehouseRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def list_active(
        self, *, warehouse_type: Optional[str] = None, eps_code: Optional[str] = None
    ) -> List[Warehouse]:
        stmt = select(Warehouse).where(Warehouse.is_active.is_(True))
        if warehouse_type:
            stmt = stmt.where(Warehouse.type == warehouse_type)
        if eps_code:
            # Codes of EPS warehouses start with the EPS code
            stmt = stmt.where(Warehouse.code.startswith(eps_code, autoescape=True))
        stmt = stmt.order_by(Warehouse.name.asc(), Warehouse.id.asc())
        return list(self.session.execute(stmt).scalars().all())

    def get_by_code(self, code: str) -> Optional[Warehouse]:
        stmt = select(Warehouse).where(Warehouse.code == code)
        return self.session.execute(stmt).scalars().first()

    def create_warehouse(
        self,
        *,
        code: str,
        name: str,
        warehouse_type: str = "PRINCIPAL",
        eps_id: Optional[int] = None,
        address: Optional[str] = None,
        is_active: bool = True,
    ) -> Warehouse:
        if not isinstance(code, str) or not code.strip():
            raise ValueError("code must be a non-empty string")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("name must be a non-empty string")
        if warehouse_type not in WAREHOUSE_TYPES:
            raise ValueError(f"warehouse_type must be one of {', '.join(WAREHOUSE_TYPES)}")

        warehouse = Warehouse(
            code=code.strip(),
            name=name.strip(),
            type=warehouse_type,
            eps_id=eps_id,
            address=address,
            is_active=bool(is_active),
        )
        self.session.add(warehouse)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("A warehouse with this code already exists") from exc
        self.session.refresh(warehouse)
        return warehouse
