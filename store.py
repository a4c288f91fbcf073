import threading
from typing import Dict
from uuid import uuid4

from models import Receipt


class ReceiptNotFoundError(LookupError):
    """ Raised when no receipt was stored under the requested id """


class ReceiptStore:
    """
    In-memory mapping of receipt id -> receipt.

    Receipts are kept for the lifetime of the process. There is no update or delete,
    and every operation holds the lock so concurrent requests never lose a write.
    """

    def __init__(self):
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def put(self, receipt: Receipt) -> str:
        receipt_id = str(uuid4())
        with self._lock:
            self._receipts[receipt_id] = receipt
        return receipt_id

    def get(self, receipt_id: str) -> Receipt:
        with self._lock:
            receipt = self._receipts.get(receipt_id)
        if receipt is None:
            raise ReceiptNotFoundError(receipt_id)
        return receipt

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
