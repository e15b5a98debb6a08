"""Supplier registration — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.supplier.supplier import Supplier


@warehouse.command(part_of="Supplier")
class RegisterSupplier:
    name = String(required=True, max_length=255)
    ruc = String(required=True, max_length=20)
    district = String(max_length=100)
    province = String(max_length=100)
    department = String(max_length=100)


@warehouse.command_handler(part_of=Supplier)
class RegisterSupplierHandler:
    @handle(RegisterSupplier)
    def register_supplier(self, command):
        repo = current_domain.repository_for(Supplier)
        if repo.find_by_ruc(command.ruc) is not None:
            raise ValidationError({"ruc": [f"A supplier with RUC {command.ruc} is already registered"]})

        supplier = Supplier.register(
            name=command.name,
            ruc=command.ruc,
            district=command.district,
            province=command.province,
            department=command.department,
        )
        repo.add(supplier)
        return str(supplier.id)
