"""Tests for the fetch-modify-write product updater."""

from inventory_sync.models import PendingUpdate
from inventory_sync.reconciliation.product_updater import ProductUpdater, merge_updates
from tests.conftest import TARGET_URL, FakeResponse

PRODUCT_URL = f"{TARGET_URL}/products/42"


def product_document():
    return {
        "id": 42,
        "name": "Shirt",
        "description": "kept as is",
        "variants": [
            {"id": 9, "taager_code": "ABC", "quantity": 3, "price": 100, "expense": 40, "sku": "x"},
            {"id": 10, "taager_code": "DEF", "quantity": 1, "price": 50, "expense": 20},
        ],
    }


def test_merge_updates_overwrites_only_carried_fields():
    document = product_document()

    modified = merge_updates(
        document,
        [PendingUpdate(variant_id="9", quantity=7), PendingUpdate(variant_id=99, quantity=1)],
    )

    assert modified == ["9"]
    assert document["variants"][0] == {
        "id": 9,
        "taager_code": "ABC",
        "quantity": 7,
        "price": 100,
        "expense": 40,
        "sku": "x",
    }
    assert document["variants"][1]["quantity"] == 1


def test_merge_updates_without_variant_list():
    assert merge_updates({"id": 42}, [PendingUpdate(variant_id=9, quantity=1)]) == []
    assert merge_updates({"id": 42, "variants": None}, [PendingUpdate(variant_id=9, quantity=1)]) == []


def test_apply_fetches_merges_and_writes_full_document(target_provider, logger, session):
    session.add("GET", PRODUCT_URL, FakeResponse(product_document()))
    session.add("PATCH", PRODUCT_URL, FakeResponse({"ok": True}))
    updater = ProductUpdater(target_provider, logger)

    result = updater.apply(42, [PendingUpdate(variant_id=9, quantity=7, price=100, expense=40)])

    assert result.status == "success"
    assert result.modified_variants == ["9"]
    written = session.calls_to("PATCH", PRODUCT_URL)[0]["json"]
    expected = product_document()
    expected["variants"][0]["quantity"] = 7
    assert written == expected


def test_apply_skips_write_when_no_variant_found(target_provider, logger, session):
    session.add("GET", PRODUCT_URL, FakeResponse(product_document()))
    updater = ProductUpdater(target_provider, logger)

    result = updater.apply(42, [PendingUpdate(variant_id=404, quantity=7)])

    assert result.status == "skipped"
    assert session.calls_to("PATCH", PRODUCT_URL) == []


def test_apply_fetch_failure_is_reported(target_provider, logger, session, requests_error):
    session.add("GET", PRODUCT_URL, requests_error)
    updater = ProductUpdater(target_provider, logger)

    result = updater.apply(42, [PendingUpdate(variant_id=9, quantity=7)])

    assert result.status == "failed"
    assert "Failed to fetch product 42" in result.error_message
    assert session.calls_to("PATCH", PRODUCT_URL) == []


def test_apply_write_failure_is_reported_once(target_provider, logger, session):
    session.add("GET", PRODUCT_URL, FakeResponse(product_document()))
    session.add("PATCH", PRODUCT_URL, FakeResponse({"message": "invalid"}, status_code=422))
    updater = ProductUpdater(target_provider, logger)

    result = updater.apply(42, [PendingUpdate(variant_id=9, quantity=7)])

    assert result.status == "failed"
    assert "HTTP 422" in result.error_message
    assert len(session.calls_to("PATCH", PRODUCT_URL)) == 1


def test_apply_dry_run_does_not_write(target_provider, logger, session):
    session.add("GET", PRODUCT_URL, FakeResponse(product_document()))
    updater = ProductUpdater(target_provider, logger, dry_run=True)

    result = updater.apply(42, [PendingUpdate(variant_id=9, quantity=7)])

    assert result.status == "dry_run"
    assert session.calls_to("PATCH", PRODUCT_URL) == []


def test_apply_with_no_updates_does_nothing(target_provider, logger, session):
    updater = ProductUpdater(target_provider, logger)

    result = updater.apply(42, [])

    assert result.status == "skipped"
    assert session.calls == []
