"""Unit tests for the DynamoDB service against moto."""

from decimal import Decimal

import pytest

from listings.services.dynamodb import DynamoDBService

OWNER_ID = "a1b2c3d4-e5f6-7890-abcd-ef1234567890"


def property_item(property_id: str, created_at: str, owner_id: str = OWNER_ID) -> dict:
    return {
        "property_id": property_id,
        "owner_id": owner_id,
        "name": f"Property {property_id}",
        "property_type": "studio",
        "status": "draft",
        "created_at": created_at,
        "updated_at": created_at,
    }


class TestTableNames:
    def test_explicit_prefix(self, aws: None) -> None:
        service = DynamoDBService(table_prefix="custom", region="eu-west-1")
        assert service._table_name("properties") == "custom-properties"

    def test_prefix_from_environment(
        self, aws: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("DYNAMODB_TABLE_PREFIX", raising=False)
        service = DynamoDBService(environment="prod", region="eu-west-1")
        assert service._table_name("property-images") == "listings-prod-property-images"


class TestProperties:
    """Tests for property records."""

    def test_create_and_get(self, db: DynamoDBService) -> None:
        assert db.create_property(property_item("p-1", "2025-01-01T00:00:00+00:00")) is True

        item = db.get_property("p-1")

        assert item is not None
        assert item["owner_id"] == OWNER_ID

    def test_create_duplicate_id(self, db: DynamoDBService) -> None:
        db.create_property(property_item("p-1", "2025-01-01T00:00:00+00:00"))

        assert db.create_property(property_item("p-1", "2025-01-02T00:00:00+00:00")) is False

    def test_get_missing(self, db: DynamoDBService) -> None:
        assert db.get_property("missing") is None

    def test_list_by_owner_newest_first(self, db: DynamoDBService) -> None:
        db.create_property(property_item("old", "2025-01-01T00:00:00+00:00"))
        db.create_property(property_item("new", "2025-03-01T00:00:00+00:00"))
        db.create_property(property_item("other", "2025-02-01T00:00:00+00:00", owner_id="x"))

        items = db.list_properties_by_owner(OWNER_ID)

        assert [i["property_id"] for i in items] == ["new", "old"]

    def test_update_property(self, db: DynamoDBService) -> None:
        db.create_property(property_item("p-1", "2025-01-01T00:00:00+00:00"))

        updated = db.update_property("p-1", {"status": "active", "name": "Renamed"})

        assert updated is not None
        assert updated["status"] == "active"
        assert updated["name"] == "Renamed"

    def test_update_missing_property(self, db: DynamoDBService) -> None:
        assert db.update_property("missing", {"status": "active"}) is None
        assert db.get_property("missing") is None

    def test_empty_patch_returns_current(self, db: DynamoDBService) -> None:
        db.create_property(property_item("p-1", "2025-01-01T00:00:00+00:00"))

        item = db.update_property("p-1", {})

        assert item is not None
        assert item["status"] == "draft"

    def test_delete_property(self, db: DynamoDBService) -> None:
        db.create_property(property_item("p-1", "2025-01-01T00:00:00+00:00"))

        db.delete_property("p-1")

        assert db.get_property("p-1") is None


class TestPropertyImages:
    """Tests for image rows."""

    def rows(self, property_id: str, count: int) -> list[dict]:
        return [
            {
                "property_id": property_id,
                "position": i,
                "image_id": f"img-{i}",
                "path": f"properties/{OWNER_ID}/img-{i}.jpg",
                "url": f"https://cdn.example.com/img-{i}.jpg",
                "is_cover": i == 0,
            }
            for i in range(count)
        ]

    def test_insert_and_read_in_position_order(self, db: DynamoDBService) -> None:
        assert db.insert_property_images(list(reversed(self.rows("p-1", 3)))) == 3

        rows = db.get_property_images("p-1")

        assert [r["position"] for r in rows] == [Decimal(0), Decimal(1), Decimal(2)]

    def test_insert_nothing(self, db: DynamoDBService) -> None:
        assert db.insert_property_images([]) == 0

    def test_delete_returns_rows(self, db: DynamoDBService) -> None:
        db.insert_property_images(self.rows("p-1", 2))
        db.insert_property_images(self.rows("p-2", 1))

        deleted = db.delete_property_images("p-1")

        assert [r["image_id"] for r in deleted] == ["img-0", "img-1"]
        assert db.get_property_images("p-1") == []
        assert len(db.get_property_images("p-2")) == 1
