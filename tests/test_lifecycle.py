"""Tests for the item lifecycle service."""

import json

import pytest

from ifound.schemas import ItemStatus, ReportStatus
from ifound.services import LifecycleService, QueryService


@pytest.fixture
def lifecycle(state_store, clock):
    return LifecycleService(state_store, clock=clock)


@pytest.fixture
def queries(state_store):
    return QueryService(state_store)


class TestAddItem:
    """Tests for item registration."""

    def test_add_item_registered(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)

        assert item.status == ItemStatus.REGISTERED
        assert item.created_at
        assert item.found_photo_path is None
        assert item.last_claimed_at is None
        assert lifecycle.get_item(item.id) == item

    def test_blank_optionals_stored_as_null(self, lifecycle, state_store):
        item = lifecycle.add_item(item_name="Cup", student_id="S", owner_name="O", contact="")

        raw = json.loads(state_store.get_raw())["items"][0]
        assert raw["contact"] is None
        assert raw["photoPath"] is None
        assert raw["category"] == "other"
        assert item.category == "other"

    def test_unknown_category_rejected(self, lifecycle, state_store):
        with pytest.raises(ValueError):
            lifecycle.add_item(item_name="Cup", student_id="S", owner_name="O", category="banana")

        assert state_store.get_raw() is None or json.loads(state_store.get_raw())["items"] == []

    def test_ids_unique(self, lifecycle):
        ids = {lifecycle.add_item(item_name="Same", student_id="S", owner_name="O").id for _ in range(20)}
        assert len(ids) == 20

    def test_duplicate_names_not_enforced_by_store(self, lifecycle, queries):
        lifecycle.add_item(item_name="Cup", student_id="S", owner_name="O")
        lifecycle.add_item(item_name="Cup", student_id="S", owner_name="O")

        assert len(queries.list_items_by_student("S")) == 2

    def test_get_item_unknown(self, lifecycle):
        assert lifecycle.get_item("missing") is None


class TestFoundReports:
    """Tests for found report creation and verification."""

    def test_report_ids_sequential(self, lifecycle):
        first = lifecycle.add_found_report("x", "Ben", "Library")
        second = lifecycle.add_found_report("x", "Ben", "Library")

        assert (first.id, second.id) == (1, 2)
        assert first.status == ReportStatus.PENDING

    def test_dangling_item_allowed(self, lifecycle, queries):
        report = lifecycle.add_found_report("no-such-item", "Ben", "Gym")

        assert report.id == 1
        assert queries.list_pending_reports_with_item()[0].item_name == "Unknown"

    def test_verify_moves_item_to_lost(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)
        report = lifecycle.add_found_report(item.id, "Ben", "Library", photo_data_url="found")

        assert lifecycle.verify_report_move_to_lost(report.id) is True

        updated = lifecycle.get_item(item.id)
        assert updated.status == ItemStatus.LOST
        assert updated.found_photo_path == "found"

    def test_verify_without_photo_keeps_found_photo_absent(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)
        report = lifecycle.add_found_report(item.id, "Ben", "Library")

        assert lifecycle.verify_report_move_to_lost(report.id)
        assert lifecycle.get_item(item.id).found_photo_path is None

    def test_verify_accepts_string_id(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)
        lifecycle.add_found_report(item.id, "Ben", "Library")

        assert lifecycle.verify_report_move_to_lost("1") is True

    def test_verify_unknown_report_leaves_store_unchanged(self, lifecycle, state_store, sample_item_fields):
        lifecycle.add_item(**sample_item_fields)
        before = state_store.get_raw()

        assert lifecycle.verify_report_move_to_lost(99) is False
        assert lifecycle.verify_report_move_to_lost("abc") is False
        assert state_store.get_raw() == before

    @pytest.mark.parametrize("report_id", [1.5, "1.5", True, " ", None])
    def test_verify_rejects_inexact_report_id(self, lifecycle, state_store, sample_item_fields, report_id):
        """Ids are never truncated or coerced onto report 1."""
        item = lifecycle.add_item(**sample_item_fields)
        lifecycle.add_found_report(item.id, "Ben", "Library")
        before = state_store.get_raw()

        assert lifecycle.verify_report_move_to_lost(report_id) is False
        assert state_store.get_raw() == before

    @pytest.mark.parametrize("report_id", [1, 1.0, "1", " 1 "])
    def test_verify_accepts_exact_report_id(self, lifecycle, queries, sample_item_fields, report_id):
        item = lifecycle.add_item(**sample_item_fields)
        lifecycle.add_found_report(item.id, "Ben", "Library")

        assert lifecycle.verify_report_move_to_lost(report_id) is True
        assert queries.get_item(item.id).status == ItemStatus.LOST

    def test_verify_dangling_report_fails(self, lifecycle, queries):
        report = lifecycle.add_found_report("gone", "Ben", "Gym")

        assert lifecycle.verify_report_move_to_lost(report.id) is False
        assert queries.list_pending_reports_with_item()[0].report.status == ReportStatus.PENDING

    def test_reverification_last_photo_wins(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)
        r1 = lifecycle.add_found_report(item.id, "Ben", "Library", photo_data_url="first")
        r2 = lifecycle.add_found_report(item.id, "Cara", "Gym", photo_data_url="second")

        lifecycle.verify_report_move_to_lost(r1.id)
        lifecycle.verify_report_move_to_lost(r2.id)
        assert lifecycle.get_item(item.id).found_photo_path == "second"

        lifecycle.verify_report_move_to_lost(r1.id)
        assert lifecycle.get_item(item.id).found_photo_path == "first"


class TestClaims:
    """Tests for reclaiming items."""

    def test_claim_sets_status_and_timestamp(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)

        claim = lifecycle.add_claim(item.id, "Ana")

        assert claim.id == 1
        updated = lifecycle.get_item(item.id)
        assert updated.status == ItemStatus.CLAIMED
        assert updated.last_claimed_at == claim.created_at

    def test_claim_unknown_item(self, lifecycle, queries):
        assert lifecycle.add_claim("missing", "Ana") is None
        assert queries.list_claims_with_item() == []

    def test_claim_unknown_item_does_not_advance_sequence(self, lifecycle, sample_item_fields):
        lifecycle.add_claim("missing", "Ana")
        item = lifecycle.add_item(**sample_item_fields)

        assert lifecycle.add_claim(item.id, "Ana").id == 1

    def test_reclaim_overwrites_timestamp(self, lifecycle, queries, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)
        lifecycle.add_claim(item.id, "Ana")
        second = lifecycle.add_claim(item.id, "Ana")

        assert second.id == 2
        assert lifecycle.get_item(item.id).last_claimed_at == second.created_at
        assert len(queries.list_claims_with_item()) == 2

    def test_claim_as_owner_matches_trimmed_id(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)

        claim = lifecycle.claim_as_owner(item.id, "  S1 ")

        assert claim is not None
        assert claim.claimant_name == "Ana"

    def test_claim_as_owner_rejects_mismatch(self, lifecycle, sample_item_fields):
        item = lifecycle.add_item(**sample_item_fields)

        assert lifecycle.claim_as_owner(item.id, "S2") is None
        assert lifecycle.get_item(item.id).status == ItemStatus.REGISTERED

    def test_claim_as_owner_without_owner_name(self, lifecycle):
        item = lifecycle.add_item(item_name="Cup", student_id="S", owner_name="")

        assert lifecycle.claim_as_owner(item.id, "S").claimant_name == "Owner"


class TestScenario:
    """Register, report, verify, claim end to end."""

    def test_full_lifecycle(self, lifecycle, queries):
        item = lifecycle.add_item(
            item_name="Blue Wallet",
            student_id="S1",
            owner_name="Ana",
            category="wallets",
            photo_data_url="x",
        )
        assert item.status == ItemStatus.REGISTERED

        report = lifecycle.add_found_report(item.id, "Ben", "Library")
        assert report.id == 1
        assert report.status == ReportStatus.PENDING

        assert lifecycle.verify_report_move_to_lost(1) is True
        assert lifecycle.get_item(item.id).status == ItemStatus.LOST

        claim = lifecycle.add_claim(item.id, "Ana")
        assert claim.id == 1
        assert lifecycle.get_item(item.id).status == ItemStatus.CLAIMED

        assert queries.analytics().to_dict() == {
            "total": 1,
            "lost": 0,
            "claimed": 1,
            "pendingReports": 0,
            "recoveryRate": 100,
        }
