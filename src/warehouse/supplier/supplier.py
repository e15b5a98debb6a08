"""Supplier aggregate — a business that delivers stock, identified by its RUC."""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, String

from warehouse.domain import warehouse
from warehouse.shared.records import fetch_all
from warehouse.supplier.events import SupplierRegistered


@warehouse.aggregate
class Supplier:
    name = String(required=True, min_length=2, max_length=255)
    ruc = String(required=True, min_length=8, max_length=20)
    district = String(max_length=100)
    province = String(max_length=100)
    department = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, name, ruc, district=None, province=None, department=None):
        now = datetime.now(UTC)
        supplier = cls(
            name=name.strip() if name else name,
            ruc=ruc.strip() if ruc else ruc,
            district=district,
            province=province,
            department=department,
            created_at=now,
            updated_at=now,
        )
        supplier.raise_(
            SupplierRegistered(
                supplier_id=str(supplier.id),
                name=supplier.name,
                ruc=supplier.ruc,
                registered_at=now,
            )
        )
        return supplier


@warehouse.repository(part_of=Supplier)
class SupplierRepository:
    def find_by_id(self, supplier_id) -> Supplier | None:
        if not supplier_id:
            return None
        try:
            return self.get(str(supplier_id))
        except ObjectNotFoundError:
            return None

    def find_by_ruc(self, ruc) -> Supplier | None:
        if not ruc:
            return None
        results = self._dao.query.filter(ruc=ruc.strip()).all()
        return results.items[0] if results.items else None

    def list_all(self) -> list[Supplier]:
        return sorted(fetch_all(self._dao), key=lambda supplier: supplier.name.lower())
