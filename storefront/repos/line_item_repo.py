# storefront/repos/line_item_repo.py
from sqlalchemy import select, update, delete, case
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect not in _DIALECT_INSERTS:
        raise RuntimeError(f"Unsupported database dialect for upserts: {dialect}")
    return _DIALECT_INSERTS[dialect]


class LineItemRepo:
    """
    One repo for both cart and wishlist lines, parameterized by model.
    Both tables carry user_id, product_id and a unique (user_id, product_id).
    """

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    def get_line(self, line_id: int):
        return self.db.get(self.model, line_id)

    def get_user_line(self, user_id: int, line_id: int):
        return self.db.execute(
            select(self.model).where(self.model.id == line_id, self.model.user_id == user_id)
        ).scalar_one_or_none()

    def get_by_product(self, user_id: int, product_id: int):
        return self.db.execute(
            select(self.model).where(
                self.model.user_id == user_id,
                self.model.product_id == product_id,
            )
        ).scalar_one_or_none()

    def list_with_products(self, user_id: int):
        # outer join so orphaned lines come back with product None
        stmt = (
            select(self.model, ProductModel)
            .outerjoin(ProductModel, ProductModel.id == self.model.product_id)
            .where(self.model.user_id == user_id)
            .order_by(self.model.id)
        )
        return self.db.execute(stmt).all()

    def insert_if_absent(self, user_id: int, product_id: int, **values):
        """INSERT .. ON CONFLICT DO NOTHING RETURNING; None when the pair already exists."""
        insert = _insert_for(self.db)
        stmt = (
            insert(self.model)
            .values(user_id=user_id, product_id=product_id, **values)
            .on_conflict_do_nothing(index_elements=["user_id", "product_id"])
            .returning(self.model)
        )
        return self.db.scalars(stmt, execution_options={"populate_existing": True}).one_or_none()

    def increment_clamped(self, user_id: int, product_id: int, quantity: int, stock: int):
        # single statement, so concurrent increments cannot lose each other
        target = self.model.quantity + quantity
        stmt = (
            update(self.model)
            .where(
                self.model.user_id == user_id,
                self.model.product_id == product_id,
            )
            .values(quantity=case((target > stock, stock), else_=target))
            .returning(self.model)
        )
        return self.db.scalars(stmt, execution_options={"populate_existing": True}).one_or_none()

    def delete_line(self, line) -> None:
        self.db.delete(line)

    def delete_by_product(self, user_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(self.model).where(
                self.model.user_id == user_id,
                self.model.product_id == product_id,
            ),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount

    def delete_for_user(self, user_id: int) -> int:
        result = self.db.execute(
            delete(self.model).where(self.model.user_id == user_id),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount

    def delete_lines(self, line_ids: list[int]) -> int:
        if not line_ids:
            return 0
        result = self.db.execute(
            delete(self.model).where(self.model.id.in_(line_ids)),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount

    def delete_orphans(self) -> int:
        result = self.db.execute(
            delete(self.model).where(~self.model.product_id.in_(select(ProductModel.id))),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
