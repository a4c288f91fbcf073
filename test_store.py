import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from models import Receipt
from store import ReceiptNotFoundError, ReceiptStore


@pytest.fixture
def receipt():
    return Receipt(retailer="Target", purchase_date="2022-01-02", purchase_time="13:13", total="1.25")


def test_put_then_get(store, receipt):
    receipt_id = store.put(receipt)
    uuid.UUID(receipt_id)
    assert store.get(receipt_id) is receipt
    assert receipt_id in store
    assert len(store) == 1


def test_get_unknown_id(store):
    with pytest.raises(ReceiptNotFoundError):
        store.get("test")
    assert "test" not in store


def test_same_receipt_gets_fresh_ids(store, receipt):
    first = store.put(receipt)
    second = store.put(receipt)
    assert first != second
    assert len(store) == 2


def test_stores_are_independent(receipt):
    one, other = ReceiptStore(), ReceiptStore()
    receipt_id = one.put(receipt)
    with pytest.raises(ReceiptNotFoundError):
        other.get(receipt_id)


def test_concurrent_puts_are_not_lost(store, receipt):
    with ThreadPoolExecutor(max_workers=20) as pool:
        receipt_ids = list(pool.map(store.put, [receipt] * 1000))
    assert len(store) == 1000
    assert all(store.get(receipt_id) is receipt for receipt_id in receipt_ids)
