"""Receivable errors -> HTTP responses"""
from fastapi import HTTPException

from motoshop.services.receivables.errors import (
    AmountExceedsBalance, AmountExceedsTotalBalance, ConcurrentModification,
    CustomerNotFound, InvalidAmount, PersistenceFailure, ReceivableNotFound,
    ReceivablesError,
)

STATUS_CODES = {
    InvalidAmount: 400,
    AmountExceedsBalance: 400,
    AmountExceedsTotalBalance: 400,
    CustomerNotFound: 404,
    ReceivableNotFound: 404,
    ConcurrentModification: 409,
    PersistenceFailure: 500,
}


def to_http_exception(exc: ReceivablesError) -> HTTPException:
    status_code = STATUS_CODES.get(type(exc), 400)
    return HTTPException(
        status_code=status_code,
        detail={"code": type(exc).__name__, "message": exc.message},
    )
