from fastapi import APIRouter, Depends, Query, Response

from ..domain import CLEAR, KEEP, Money, Set, Transaction, TransactionDate
from ..models.types import format_timestamp
from ..schemas import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    PaginatedTransactionsResponse,
)
from ..services import TransactionService
from .deps import get_transaction_service
from .errors import BadRequestError, parse_id

router = APIRouter()

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _build_response(transaction: Transaction) -> dict:
    return {
        "id": str(transaction.id),
        "entry_id": str(transaction.entry_id),
        "amount": transaction.amount.value,
        "date": str(transaction.date),
        "title": transaction.title,
        "created_at": format_timestamp(transaction.created_at),
        "updated_at": format_timestamp(transaction.updated_at),
    }


@router.get(
    "",
    response_model=list[TransactionResponse] | PaginatedTransactionsResponse,
)
def list_transactions(
    month: str | None = None,
    entry_id: str | None = None,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    service: TransactionService = Depends(get_transaction_service),
):
    """
    List transactions, newest first.

    Filter by ``month`` (a month id) for the whole month, or by ``entry_id``
    for a paginated page of one entry's transactions.
    """
    if entry_id is not None:
        # One extra row tells us whether another page exists
        rows = service.list_by_entry(parse_id(entry_id), limit + 1, offset)
        return {
            "items": [_build_response(t) for t in rows[:limit]],
            "has_more": len(rows) > limit,
        }

    if month is None:
        raise BadRequestError(
            "month or entry_id query parameter is required",
            code="TRANSACTIONS_MONTH_REQUIRED",
        )

    return [_build_response(t) for t in service.list_by_month(parse_id(month))]


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
):
    """Record a payment against a budget entry."""
    entry_ulid = parse_id(data.entry_id)
    transaction = service.create(
        entry_ulid,
        Money(data.amount),
        TransactionDate.parse(data.date),
        data.title,
    )
    return _build_response(transaction)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    data: TransactionUpdate,
    service: TransactionService = Depends(get_transaction_service),
):
    """Update a transaction. An explicit null title clears it."""
    transaction_ulid = parse_id(transaction_id)

    entry_id = parse_id(data.entry_id) if data.entry_id is not None else None
    amount = Money(data.amount) if data.amount is not None else None
    date = TransactionDate.parse(data.date) if data.date is not None else None
    title = KEEP
    if "title" in data.model_fields_set:
        title = CLEAR if data.title is None else Set(data.title)

    transaction = service.update(
        transaction_ulid,
        entry_id=entry_id,
        amount=amount,
        date=date,
        title=title,
    )
    return _build_response(transaction)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
):
    service.delete(parse_id(transaction_id))
    return Response(status_code=204)
