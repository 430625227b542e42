"""
Generic tenant-scoped repository.

Every company-owned table carries a ``company_id`` column. ``TenantRepository``
binds a model to one tenant so that every query it builds is filtered by that
tenant; there is no method that reads or writes outside it.
"""
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, Type, TypeVar

from sqlalchemy.orm import Session

from zootel.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class TenantRepository(Generic[ModelT]):

    def __init__(self, db: Session, model: Type[ModelT], company_id: str):
        if not hasattr(model, "company_id"):
            raise TypeError(f"{model.__name__} is not tenant-owned")
        self.db = db
        self.model = model
        self.company_id = company_id

    def query(self):
        return self.db.query(self.model).filter(self.model.company_id == self.company_id)

    def get(self, entity_id: str) -> Optional[ModelT]:
        return self.query().filter(self.model.id == entity_id).first()

    def list(
        self,
        offset: int = 0,
        limit: int = 20,
        filters: Iterable[Any] = (),
        order_by: Iterable[Any] = (),
    ) -> Tuple[List[ModelT], int]:
        """Return one page of rows and the total row count for the same filters"""
        query = self.query()
        for condition in filters:
            query = query.filter(condition)
        total = query.count()
        if order_by:
            query = query.order_by(*order_by)
        items = query.offset(offset).limit(limit).all()
        return items, total

    def create(self, **fields) -> ModelT:
        fields["company_id"] = self.company_id
        obj = self.model(**fields)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj: ModelT, fields: Dict[str, Any]) -> ModelT:
        fields.pop("company_id", None)
        fields.pop("id", None)
        for field, value in fields.items():
            setattr(obj, field, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def soft_delete(self, obj: ModelT) -> ModelT:
        if not hasattr(obj, "active"):
            raise TypeError(f"{self.model.__name__} does not support soft delete")
        return self.update(obj, {"active": False})
