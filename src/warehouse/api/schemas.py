"""Pydantic request/response schemas for the Warehouse API.

These are external contracts, separate from internal Protean commands.
Bulk item schemas accept missing or out-of-range values; those are reported
per item by the bulk processors instead of failing the request.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Steel bolt M8",
                    "description": "Hex head, zinc plated",
                    "unit_of_measurement": "unit",
                    "material_type": "steel",
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    description: str | None = Field(None, max_length=255)
    unit_of_measurement: str = Field(..., max_length=255)
    material_type: str = Field(..., max_length=255)


class UpdateProductRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=255)
    unit_of_measurement: str | None = Field(None, max_length=255)
    material_type: str | None = Field(None, max_length=255)


class BulkProductItem(BaseModel):
    title: str | None = None
    description: str | None = None
    unit_of_measurement: str | None = None
    material_type: str | None = None


class BulkProductRequest(BaseModel):
    products: list[BulkProductItem]


class ProductSchema(BaseModel):
    id: str
    title: str
    description: str | None = None
    unit_of_measurement: str
    material_type: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductStockResponse(BaseModel):
    product_id: str
    available_stock: float


class ProductBulkError(BaseModel):
    index: int
    field: str
    message: str


class BulkProductItemResponse(BaseModel):
    index: int
    product: ProductSchema | None = None
    error: ProductBulkError | None = None


class ProductBulkResponse(BaseModel):
    errors: list[ProductBulkError] | None = None
    results: list[BulkProductItemResponse]
    total_created: int
    total_failed: int


# ---------------------------------------------------------------------------
# Supplier
# ---------------------------------------------------------------------------
class RegisterSupplierRequest(BaseModel):
    name: str = Field(..., max_length=255)
    ruc: str = Field(..., max_length=20)
    district: str | None = Field(None, max_length=100)
    province: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)


class SupplierSchema(BaseModel):
    id: str
    name: str
    ruc: str
    district: str | None = None
    province: str | None = None
    department: str | None = None


class SupplierIdResponse(BaseModel):
    supplier_id: str


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------
class RecordEntryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "3f7c1b9e-0000-4000-8000-000000000001",
                    "ruc": "20123456789",
                    "quantity": 100,
                    "price": 0.35,
                    "start_time": "2026-03-01T08:00:00Z",
                }
            ]
        }
    }

    product_id: str
    ruc: str
    quantity: float
    price: float = Field(ge=0)
    start_time: datetime


class UpdateEntryRequest(BaseModel):
    quantity: float
    price: float = Field(ge=0)
    start_time: datetime


class BulkEntryItem(BaseModel):
    product_id: str | None = None
    ruc: str | None = None
    quantity: float | None = None
    price: float | None = None
    start_time: datetime | None = None


class BulkEntryRequest(BaseModel):
    entries: list[BulkEntryItem]


class EntrySchema(BaseModel):
    id: str
    product_id: str
    supplier_id: str
    quantity: float
    price: float
    start_time: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None
    product: ProductSchema | None = None
    supplier: SupplierSchema | None = None


class EntryIdResponse(BaseModel):
    entry_id: str


class BulkEntryError(BaseModel):
    index: int | None = None
    field: str
    message: str
    ruc: str | None = None
    product_id: str | None = None


class BulkEntryResult(BaseModel):
    entry: EntrySchema | None = None
    errors: list[BulkEntryError] | None = None


class BulkEntryResponse(BaseModel):
    results: list[BulkEntryResult]
    total: int
    success_count: int
    error_count: int


# ---------------------------------------------------------------------------
# Withdrawal
# ---------------------------------------------------------------------------
class RecordWithdrawalRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "3f7c1b9e-0000-4000-8000-000000000001",
                    "title": "Assembly line 2",
                    "quantity": 40,
                    "end_time": "2026-03-02T17:30:00Z",
                }
            ]
        }
    }

    product_id: str
    title: str = Field(..., max_length=255)
    quantity: float
    end_time: datetime


class UpdateWithdrawalRequest(BaseModel):
    title: str = Field(..., max_length=255)
    quantity: float
    end_time: datetime


class BulkWithdrawalItem(BaseModel):
    product_id: str | None = None
    title: str | None = None
    quantity: float | None = None
    end_time: datetime | None = None


class BulkWithdrawalRequest(BaseModel):
    withdrawals: list[BulkWithdrawalItem]


class WithdrawalSchema(BaseModel):
    id: str
    product_id: str
    title: str
    quantity: float
    end_time: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None
    product: ProductSchema | None = None


class WithdrawalIdResponse(BaseModel):
    withdrawal_id: str


class BulkWithdrawalError(BaseModel):
    index: int | None = None
    field: str
    message: str
    product_id: str | None = None
    available: float | None = None
    requested: float | None = None


class BulkWithdrawalResult(BaseModel):
    withdrawal: WithdrawalSchema | None = None
    errors: list[BulkWithdrawalError] | None = None


class BulkWithdrawalResponse(BaseModel):
    results: list[BulkWithdrawalResult]
    total: int
    success_count: int
    error_count: int


# ---------------------------------------------------------------------------
# Generic
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class DeletedResponse(BaseModel):
    deleted: bool
