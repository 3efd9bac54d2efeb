"""Tests for AssetRepository and GoalRepository."""

from decimal import Decimal

import pytest

from tests.factories import make_asset
from wealthvue.services.repositories.asset_repository import AssetRepository
from wealthvue.services.repositories.exceptions import NotFoundError
from wealthvue.services.repositories.goal_repository import GoalRepository


class TestAssetRepository:
    """Test AssetRepository."""

    def test_create_assigns_id(self, db):
        asset = AssetRepository(db).create(make_asset("Apple"))
        assert len(asset.id) == 36
        assert asset.created_at is not None

    def test_get_by_id_missing_raises(self, db):
        with pytest.raises(NotFoundError) as exc_info:
            AssetRepository(db).get_by_id("missing")
        assert exc_info.value.identifier == "missing"

    def test_find_by_name_and_type_is_case_insensitive(self, db):
        repo = AssetRepository(db)
        created = repo.create(make_asset("Bitcoin", "crypto"))

        assert repo.find_by_name_and_type("BITCOIN", "crypto") is created
        assert repo.find_by_name_and_type("bitcoin", "stock") is None

    def test_update(self, db):
        repo = AssetRepository(db)
        asset = repo.create(make_asset("Car", "vehicle", 20000))

        updated = repo.update(asset.id, {"total_value": Decimal("18000")})

        assert updated.total_value == Decimal("18000")

    def test_delete_many_ignores_unknown_ids(self, db):
        repo = AssetRepository(db)
        a = repo.create(make_asset("A"))
        b = repo.create(make_asset("B"))
        repo.create(make_asset("C"))

        assert repo.delete_many([a.id, b.id, "unknown", a.id]) == 2
        assert [x.name for x in repo.find_all()] == ["C"]

    def test_delete_many_empty(self, db):
        assert AssetRepository(db).delete_many([]) == 0


class TestGoalRepository:
    """Test GoalRepository."""

    def test_save_replaces_single_goal(self, db):
        repo = GoalRepository(db)
        repo.save(Decimal("100000"), "USD")
        repo.save(Decimal("2000000"), "ZAR")

        goal = repo.find()
        assert goal.target_amount == Decimal("2000000")
        assert goal.currency == "ZAR"

    def test_clear(self, db):
        repo = GoalRepository(db)
        assert repo.clear() is False
        repo.save(Decimal("5"), "USD")
        assert repo.clear() is True
        assert repo.find() is None
