"""Per-item results and error records shared by the bulk processors."""

from dataclasses import dataclass, field

from protean.exceptions import ValidationError

GENERAL_FIELD = "general"


@dataclass(frozen=True)
class ItemError:
    """One problem with one item of a bulk request."""

    index: int
    field: str
    message: str
    product_id: str | None = None
    ruc: str | None = None
    available: float | None = None
    requested: float | None = None


def field_messages(exc: ValidationError) -> list[tuple[str, str]]:
    """Flatten a ValidationError's ``{field: [messages]}`` into pairs."""
    messages = exc.messages if isinstance(exc.messages, dict) else {GENERAL_FIELD: [str(exc)]}

    pairs = []
    for name, name_errors in messages.items():
        if isinstance(name_errors, str):
            name_errors = [name_errors]
        for message in name_errors:
            pairs.append((name, str(message)))
    return pairs or [(GENERAL_FIELD, str(exc))]


@dataclass(frozen=True)
class ItemResult:
    """Outcome of one item: the saved record, or the reasons it was rejected."""

    index: int
    record: object | None = None
    errors: tuple[ItemError, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.record is not None


@dataclass
class BulkOutcome:
    """Aggregated outcome of a bulk run, one result per input item in input order."""

    results: list[ItemResult] = field(default_factory=list)
    success_count: int = 0
    error_count: int = 0

    @property
    def total(self) -> int:
        return len(self.results)

    def succeed(self, index, record):
        self.results.append(ItemResult(index=index, record=record))
        self.success_count += 1

    def fail(self, index, *errors: ItemError):
        self.results.append(ItemResult(index=index, errors=tuple(errors)))
        self.error_count += 1
