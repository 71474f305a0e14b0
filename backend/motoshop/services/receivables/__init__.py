"""Customer receivables: ledger, allocation policy and settlement."""

from motoshop.services.receivables.allocation import allocate, fifo_order
from motoshop.services.receivables.domain import (
    ON_ACCOUNT, LedgerSummary, LedgerView, OnAccount, PaymentAllocation,
    PaymentMode, PaymentRequest, Receivable, SettlementResult, Specific,
)
from motoshop.services.receivables.errors import (
    AmountExceedsBalance, AmountExceedsTotalBalance, ConcurrentModification,
    CustomerNotFound, InvalidAmount, PersistenceFailure, ReceivableNotFound,
    ReceivablesError,
)
from motoshop.services.receivables.ledger import ReceivableLedger, summarize
from motoshop.services.receivables.settlement import SettlementOutcome, SettlementService

__all__ = [
    "allocate",
    "fifo_order",
    "ON_ACCOUNT",
    "LedgerSummary",
    "LedgerView",
    "OnAccount",
    "PaymentAllocation",
    "PaymentMode",
    "PaymentRequest",
    "Receivable",
    "SettlementResult",
    "Specific",
    "AmountExceedsBalance",
    "AmountExceedsTotalBalance",
    "ConcurrentModification",
    "CustomerNotFound",
    "InvalidAmount",
    "PersistenceFailure",
    "ReceivableNotFound",
    "ReceivablesError",
    "ReceivableLedger",
    "summarize",
    "SettlementOutcome",
    "SettlementService",
]
