"""
SQLAlchemy-based Product repository.

Implements the ProductRepo Protocol:
- list_active_molecules(): distinct molecules of active products, ascending
- search(search, is_active, offset, limit): paginated catalog search + total
Plus get_by_code / create_product for the seed tool.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dispensary.models.product import Product


__all__ = ["SqlAlchemyProductRepo"]


class SqlAlchemyProductRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    # -------------------------------
    # Reads
    # -------------------------------

    def list_active_molecules(self) -> List[Optional[str]]:
        stmt = (
            select(Product.molecule)
            .where(Product.is_active.is_(True), Product.molecule.is_not(None))
            .distinct()
            .order_by(Product.molecule.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def search(
        self,
        *,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Product], int]:
        conditions = []
        term = (search or "").strip()
        if term:
            # % and _ in the term match literally
            conditions.append(
                or_(
                    Product.code.icontains(term, autoescape=True),
                    Product.name.icontains(term, autoescape=True),
                    Product.molecule.icontains(term, autoescape=True),
                )
            )
        if is_active is not None:
            conditions.append(Product.is_active.is_(bool(is_active)))

        page_stmt = (
            select(Product)
            .where(*conditions)
            .order_by(Product.name.asc(), Product.id.asc())
            .offset(max(0, int(offset)))
            .limit(max(1, int(limit)))
        )
        count_stmt = select(func.count(Product.id)).where(*conditions)

        items = list(self.session.execute(page_stmt).scalars().all())
        total = int(self.session.execute(count_stmt).scalar() or 0)
        return items, total

    def get_by_code(self, code: str) -> Optional[Product]:
        stmt = select(Product).where(Product.code == code)
        return self.session.execute(stmt).scalars().first()

    # -------------------------------
    # Writes (seed tooling)
    # -------------------------------

    def create_product(
        self,
        *,
        code: str,
        name: str,
        molecule: Optional[str] = None,
        presentation: Optional[str] = None,
        concentration: Optional[str] = None,
        laboratory: Optional[str] = None,
        price: Decimal | float | int = 0,
        requires_prescription: bool = True,
        is_controlled: bool = False,
        min_stock: Optional[int] = None,
        max_stock: Optional[int] = None,
        is_active: bool = True,
    ) -> Product:
        if not isinstance(code, str) or not code.strip():
            raise ValueError("code must be a non-empty string")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("name must be a non-empty string")

        product = Product(
            code=code.strip(),
            name=name.strip(),
            molecule=molecule,
            presentation=presentation,
            concentration=concentration,
            laboratory=laboratory,
            price=Decimal(str(price or 0)),
            requires_prescription=bool(requires_prescription),
            is_controlled=bool(is_controlled),
            min_stock=min_stock,
            max_stock=max_stock,
            is_active=bool(is_active),
        )
        self.session.add(product)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("A product with this code already exists") from exc
        self.session.refresh(product)
        return product
