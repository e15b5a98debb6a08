"""FastAPI routes for the Warehouse domain: products, suppliers and stock ledgers."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from warehouse.api.schemas import (
    BulkEntryError,
    BulkEntryRequest,
    BulkEntryResponse,
    BulkEntryResult,
    BulkProductItemResponse,
    BulkProductRequest,
    BulkWithdrawalError,
    BulkWithdrawalRequest,
    BulkWithdrawalResponse,
    BulkWithdrawalResult,
    CreateProductRequest,
    DeletedResponse,
    EntryIdResponse,
    EntrySchema,
    ProductBulkError,
    ProductBulkResponse,
    ProductIdResponse,
    ProductSchema,
    ProductStockResponse,
    RecordEntryRequest,
    RecordWithdrawalRequest,
    RegisterSupplierRequest,
    StatusResponse,
    SupplierIdResponse,
    SupplierSchema,
    UpdateEntryRequest,
    UpdateProductRequest,
    UpdateWithdrawalRequest,
    WithdrawalIdResponse,
    WithdrawalSchema,
)
from warehouse.entry.bulk import EntryLine, record_entries
from warehouse.entry.entry import Entry
from warehouse.entry.receiving import DeleteEntry, RecordEntry, UpdateEntry
from warehouse.product.bulk import ProductLine, create_products
from warehouse.product.management import CreateProduct, DeleteProduct, UpdateProduct
from warehouse.product.product import Product
from warehouse.stock.balance import available_stock
from warehouse.supplier.registration import RegisterSupplier
from warehouse.supplier.supplier import Supplier
from warehouse.withdrawal.bulk import BulkWithdrawalProcessor, WithdrawalLine
from warehouse.withdrawal.dispatch import DeleteWithdrawal, RecordWithdrawal, UpdateWithdrawal
from warehouse.withdrawal.withdrawal import Withdrawal

product_router = APIRouter(prefix="/products", tags=["products"])
supplier_router = APIRouter(prefix="/suppliers", tags=["suppliers"])
entry_router = APIRouter(prefix="/entries", tags=["entries"])
withdrawal_router = APIRouter(prefix="/withdrawals", tags=["withdrawals"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------
def _product_schema(product) -> ProductSchema | None:
    if product is None:
        return None
    return ProductSchema(
        id=str(product.id),
        title=product.title,
        description=product.description,
        unit_of_measurement=product.unit_of_measurement,
        material_type=product.material_type,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _supplier_schema(supplier) -> SupplierSchema | None:
    if supplier is None:
        return None
    return SupplierSchema(
        id=str(supplier.id),
        name=supplier.name,
        ruc=supplier.ruc,
        district=supplier.district,
        province=supplier.province,
        department=supplier.department,
    )


def _entry_schema(entry) -> EntrySchema:
    return EntrySchema(
        id=str(entry.id),
        product_id=str(entry.product_id),
        supplier_id=str(entry.supplier_id),
        quantity=entry.quantity,
        price=entry.price,
        start_time=entry.start_time,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        product=_product_schema(current_domain.repository_for(Product).find_by_id(entry.product_id)),
        supplier=_supplier_schema(current_domain.repository_for(Supplier).find_by_id(entry.supplier_id)),
    )


def _withdrawal_schema(withdrawal) -> WithdrawalSchema:
    return WithdrawalSchema(
        id=str(withdrawal.id),
        product_id=str(withdrawal.product_id),
        title=withdrawal.title,
        quantity=withdrawal.quantity,
        end_time=withdrawal.end_time,
        created_at=withdrawal.created_at,
        updated_at=withdrawal.updated_at,
        product=_product_schema(current_domain.repository_for(Product).find_by_id(withdrawal.product_id)),
    )


# ---------------------------------------------------------------------------
# Product endpoints
# ---------------------------------------------------------------------------
@product_router.get("", response_model=list[ProductSchema])
async def list_products() -> list[ProductSchema]:
    return [_product_schema(p) for p in current_domain.repository_for(Product).list_all()]


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        title=body.title,
        description=body.description,
        unit_of_measurement=body.unit_of_measurement,
        material_type=body.material_type,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.post("/bulk", response_model=ProductBulkResponse)
async def create_products_bulk(body: BulkProductRequest) -> ProductBulkResponse:
    outcome = create_products(
        [
            ProductLine(
                title=item.title,
                unit_of_measurement=item.unit_of_measurement,
                material_type=item.material_type,
                description=item.description,
            )
            for item in body.products
        ]
    )

    def _error(error):
        return ProductBulkError(index=error.index, field=error.field, message=error.message) if error else None

    return ProductBulkResponse(
        errors=[_error(e) for e in outcome.errors] or None,
        results=[
            BulkProductItemResponse(index=r.index, product=_product_schema(r.product), error=_error(r.error))
            for r in outcome.results
        ],
        total_created=outcome.total_created,
        total_failed=outcome.total_failed,
    )


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        title=body.title,
        description=body.description,
        unit_of_measurement=body.unit_of_measurement,
        material_type=body.material_type,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=DeletedResponse)
async def delete_product(product_id: str) -> DeletedResponse:
    result = current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return DeletedResponse(deleted=bool(result))


@product_router.get("/{product_id}/stock", response_model=ProductStockResponse)
async def product_stock(product_id: str) -> ProductStockResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductStockResponse(product_id=str(product.id), available_stock=available_stock(product.id))


# ---------------------------------------------------------------------------
# Supplier endpoints
# ---------------------------------------------------------------------------
@supplier_router.get("", response_model=list[SupplierSchema])
async def list_suppliers() -> list[SupplierSchema]:
    return [_supplier_schema(s) for s in current_domain.repository_for(Supplier).list_all()]


@supplier_router.post("", status_code=201, response_model=SupplierIdResponse)
async def register_supplier(body: RegisterSupplierRequest) -> SupplierIdResponse:
    command = RegisterSupplier(
        name=body.name,
        ruc=body.ruc,
        district=body.district,
        province=body.province,
        department=body.department,
    )
    result = current_domain.process(command, asynchronous=False)
    return SupplierIdResponse(supplier_id=result)


# ---------------------------------------------------------------------------
# Entry endpoints
# ---------------------------------------------------------------------------
@entry_router.get("", response_model=list[EntrySchema])
async def list_entries() -> list[EntrySchema]:
    return [_entry_schema(e) for e in current_domain.repository_for(Entry).list_recent()]


@entry_router.post("", status_code=201, response_model=EntryIdResponse)
async def record_entry(body: RecordEntryRequest) -> EntryIdResponse:
    command = RecordEntry(
        product_id=body.product_id,
        ruc=body.ruc,
        quantity=body.quantity,
        price=body.price,
        start_time=body.start_time,
    )
    result = current_domain.process(command, asynchronous=False)
    return EntryIdResponse(entry_id=result)


@entry_router.post("/bulk", response_model=BulkEntryResponse)
async def record_entries_bulk(body: BulkEntryRequest) -> BulkEntryResponse:
    outcome = record_entries(
        [
            EntryLine(
                product_id=item.product_id,
                ruc=item.ruc,
                quantity=item.quantity,
                price=item.price,
                start_time=item.start_time,
            )
            for item in body.entries
        ]
    )
    return BulkEntryResponse(
        results=[
            BulkEntryResult(entry=_entry_schema(r.record))
            if r.succeeded
            else BulkEntryResult(
                errors=[
                    BulkEntryError(
                        index=e.index,
                        field=e.field,
                        message=e.message,
                        ruc=e.ruc,
                        product_id=e.product_id,
                    )
                    for e in r.errors
                ]
            )
            for r in outcome.results
        ],
        total=outcome.total,
        success_count=outcome.success_count,
        error_count=outcome.error_count,
    )


@entry_router.put("/{entry_id}", response_model=StatusResponse)
async def update_entry(entry_id: str, body: UpdateEntryRequest) -> StatusResponse:
    command = UpdateEntry(
        entry_id=entry_id,
        quantity=body.quantity,
        price=body.price,
        start_time=body.start_time,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@entry_router.delete("/{entry_id}", response_model=DeletedResponse)
async def delete_entry(entry_id: str) -> DeletedResponse:
    result = current_domain.process(DeleteEntry(entry_id=entry_id), asynchronous=False)
    return DeletedResponse(deleted=bool(result))


# ---------------------------------------------------------------------------
# Withdrawal endpoints
# ---------------------------------------------------------------------------
@withdrawal_router.get("", response_model=list[WithdrawalSchema])
async def list_withdrawals() -> list[WithdrawalSchema]:
    return [_withdrawal_schema(w) for w in current_domain.repository_for(Withdrawal).list_recent()]


@withdrawal_router.post("", status_code=201, response_model=WithdrawalIdResponse)
async def record_withdrawal(body: RecordWithdrawalRequest) -> WithdrawalIdResponse:
    command = RecordWithdrawal(
        product_id=body.product_id,
        title=body.title,
        quantity=body.quantity,
        end_time=body.end_time,
    )
    result = current_domain.process(command, asynchronous=False)
    return WithdrawalIdResponse(withdrawal_id=result)


@withdrawal_router.post("/bulk", response_model=BulkWithdrawalResponse)
async def record_withdrawals_bulk(body: BulkWithdrawalRequest) -> BulkWithdrawalResponse:
    outcome = BulkWithdrawalProcessor().process(
        WithdrawalLine(
            product_id=item.product_id,
            title=item.title,
            quantity=item.quantity,
            end_time=item.end_time,
        )
        for item in body.withdrawals
    )
    return BulkWithdrawalResponse(
        results=[
            BulkWithdrawalResult(withdrawal=_withdrawal_schema(r.record))
            if r.succeeded
            else BulkWithdrawalResult(
                errors=[
                    BulkWithdrawalError(
                        index=e.index,
                        field=e.field,
                        message=e.message,
                        product_id=e.product_id,
                        available=e.available,
                        requested=e.requested,
                    )
                    for e in r.errors
                ]
            )
            for r in outcome.results
        ],
        total=outcome.total,
        success_count=outcome.success_count,
        error_count=outcome.error_count,
    )


@withdrawal_router.put("/{withdrawal_id}", response_model=StatusResponse)
async def update_withdrawal(withdrawal_id: str, body: UpdateWithdrawalRequest) -> StatusResponse:
    command = UpdateWithdrawal(
        withdrawal_id=withdrawal_id,
        title=body.title,
        quantity=body.quantity,
        end_time=body.end_time,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@withdrawal_router.delete("/{withdrawal_id}", response_model=DeletedResponse)
async def delete_withdrawal(withdrawal_id: str) -> DeletedResponse:
    result = current_domain.process(DeleteWithdrawal(withdrawal_id=withdrawal_id), asynchronous=False)
    return DeletedResponse(deleted=bool(result))
