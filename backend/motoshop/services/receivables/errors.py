"""
Receivable settlement errors.

Every error carries a user-facing message; the HTTP layer turns it into the
response detail. None of them is retried here.
"""


class ReceivablesError(Exception):
    """Base class for receivable settlement failures"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmount(ReceivablesError):
    """Amount is not positive or not a well-formed money value"""


class CustomerNotFound(ReceivablesError):
    """Customer does not exist"""


class ReceivableNotFound(ReceivablesError):
    """Targeted order has no open receivable for this customer"""


class AmountExceedsBalance(ReceivablesError):
    """Specific-order payment is larger than that order's balance"""


class AmountExceedsTotalBalance(ReceivablesError):
    """On-account payment is larger than the customer's total debt"""


class ConcurrentModification(ReceivablesError):
    """A receivable changed between the read and the write; re-read and retry"""


class PersistenceFailure(ReceivablesError):
    """The store failed while writing the settlement"""
