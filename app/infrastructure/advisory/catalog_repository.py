"""
Adapter: Product catalog and risk profile repositories.

Implements ProductRepository and RiskProfileRepository ports.
Products are read together with their yield bands, which keep the
order they were configured in.

Both tables hold reference data. The service only reads them; loading
profiles and products is left to whoever provisions the database.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.domain.advisory.entities import (
    Product,
    ProductCategory,
    RiskProfile,
    YieldBand,
)
from app.domain.advisory.errors import PersistenceError
from app.domain.advisory.ports import ProductRepository, RiskProfileRepository
from app.infrastructure.advisory.database import products, risk_profiles, yield_bands


class ProductRepositoryAdapter(ProductRepository):
    """SQL implementation of the product catalog."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Return a product with its yield bands, or None if not found."""
        found = self._query(products.c.id == product_id)
        return found[0] if found else None

    def get_first_by_category(
        self, category: ProductCategory
    ) -> Optional[Product]:
        """Return the lowest-ID product of a category, or None."""
        found = self._query(products.c.category == category.name)
        return found[0] if found else None

    def list_all(self) -> list[Product]:
        """Return the whole catalog ordered by ID."""
        return self._query()

    def list_up_to_risk(self, max_risk: Decimal) -> list[Product]:
        """Return products whose risk is at most ``max_risk``."""
        return self._query(products.c.risk <= max_risk)

    def _query(self, *conditions) -> list[Product]:
        product_stmt = select(products).where(*conditions).order_by(products.c.id)
        try:
            with self._engine.connect() as conn:
                product_rows = conn.execute(product_stmt).fetchall()
                if not product_rows:
                    return []
                ids = [row.id for row in product_rows]
                band_rows = conn.execute(
                    select(yield_bands)
                    .where(yield_bands.c.product_id.in_(ids))
                    .order_by(yield_bands.c.position, yield_bands.c.id)
                ).fetchall()
        except SQLAlchemyError as exc:
            raise PersistenceError("could not read product catalog") from exc

        bands: dict[int, list[YieldBand]] = {pid: [] for pid in ids}
        for row in band_rows:
            bands[row.product_id].append(
                YieldBand(
                    id=row.id,
                    product_id=row.product_id,
                    annual_rate=row.annual_rate,
                    range_min=row.range_min,
                    range_max=row.range_max,
                )
            )

        return [
            Product(
                id=row.id,
                name=row.name,
                category=ProductCategory[row.category],
                risk=row.risk,
                bands=tuple(bands[row.id]),
            )
            for row in product_rows
        ]


class RiskProfileRepositoryAdapter(RiskProfileRepository):
    """SQL implementation of the risk profile store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, profile_id: int) -> Optional[RiskProfile]:
        """Return a risk profile by its ID, or None if not found."""
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(risk_profiles).where(risk_profiles.c.id == profile_id)
                ).fetchone()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not read profile {profile_id}") from exc

        if not row:
            return None

        return RiskProfile(
            id=row.id,
            name=row.name,
            description=row.description,
            max_risk=row.max_risk,
        )
