"""Tests for ShapingService — projecting objects onto validated field lists."""

from __future__ import annotations

import pytest

from propcheck.services.properties import PropertyValidationService
from propcheck.services.shaping import ShapingService
from tests.sample_types import Document, Matter, Profile, Revision, User, make_user


@pytest.fixture
def shaper(validator: PropertyValidationService) -> ShapingService:
    return ShapingService(validator)


class TestShape:
    def test_top_level_fields(self, shaper: ShapingService) -> None:
        result = shaper.shape([make_user()], "name, EMAIL")
        assert result.ok
        assert result.data["items"] == [{"name": "Ada Lovelace", "email": "ada@example.com"}]

    def test_nested_fields_merge(self, shaper: ShapingService) -> None:
        result = shaper.shape([make_user()], "address.street,Address.City")
        assert result.data["items"] == [
            {"address": {"street": "12 St James's Sq", "city": "London"}}
        ]

    def test_empty_fields_select_everything(self, shaper: ShapingService) -> None:
        user = make_user()
        result = shaper.shape([user], None)
        item = result.data["items"][0]
        assert list(item) == ["name", "email", "address", "profile", "tags", "label", "initials"]
        assert item["initials"] == "AL"
        assert item["address"] is user.address

    def test_none_intermediate(self, shaper: ShapingService) -> None:
        result = shaper.shape([make_user()], "profile.display_name")
        assert result.data["items"] == [{"profile": None}]

    def test_list_intermediate(self, shaper: ShapingService) -> None:
        matter = Matter(
            description="Estate",
            documents=[
                Document("will.pdf", [Revision(1), Revision(2)]),
                Document("deed.docx"),
            ],
        )
        result = shaper.shape([matter], "description,documents.file_name,documents.extension")
        assert result.data["items"] == [
            {
                "description": "Estate",
                "documents": [
                    {"file_name": "will.pdf", "extension": "pdf"},
                    {"file_name": "deed.docx", "extension": "docx"},
                ],
            }
        ]

    def test_dataclass_items(self, shaper: ShapingService) -> None:
        result = shaper.shape([Profile("ada"), Profile("grace")], "display_name")
        assert result.data == {
            "count": 2,
            "items": [{"display_name": "ada"}, {"display_name": "grace"}],
        }

    def test_invalid_fields_rejected(self, shaper: ShapingService) -> None:
        result = shaper.shape([make_user()], "name,secret")
        assert not result.ok
        assert result.op == "shape"
        assert result.error is not None
        assert result.error.code == "invalid_fields"
        assert result.error.detail["invalid_fields"] == ["secret"]

    def test_no_items(self, shaper: ShapingService) -> None:
        result = shaper.shape([], "anything")
        assert result.ok
        assert result.data == {"count": 0, "items": []}

    def test_explicit_type_validates_empty_input(self, shaper: ShapingService) -> None:
        result = shaper.shape([], "bogus", tp=User)
        assert not result.ok

    def test_validation_result_is_cached(
        self, shaper: ShapingService, validator: PropertyValidationService
    ) -> None:
        shaper.shape([make_user()], "name")
        shaper.shape([make_user("Grace Hopper")], "name")
        assert validator.get_diagnostic_info()["validation_cache_count"] == 1

    def test_property_values_per_item(self, shaper: ShapingService) -> None:
        users: list[User] = [make_user(), make_user("Grace Hopper")]
        result = shaper.shape(users, "initials")
        assert [row["initials"] for row in result.data["items"]] == ["AL", "GH"]


class TestOverlappingPaths:
    @pytest.mark.parametrize("fields", ["address, address.street", "address.street, address"])
    def test_whole_property_wins_in_either_order(
        self, shaper: ShapingService, fields: str
    ) -> None:
        user = make_user()
        result = shaper.shape([user], fields)
        assert result.data["items"] == [{"address": user.address}]

    def test_sub_paths_still_merge_without_parent(self, shaper: ShapingService) -> None:
        result = shaper.shape([make_user()], "address.city, name, address.street")
        assert result.data["items"] == [
            {"address": {"city": "London", "street": "12 St James's Sq"}, "name": "Ada Lovelace"}
        ]

    def test_repeated_token_shaped_once(self, shaper: ShapingService) -> None:
        result = shaper.shape([make_user()], "name, NAME")
        assert result.data["items"] == [{"name": "Ada Lovelace"}]


class TestNonClassItemType:
    def test_union_item_type(self, shaper: ShapingService) -> None:
        result = shaper.shape([make_user()], None, tp=User | None)
        assert result.ok
        assert result.data == {"count": 1, "items": [{}]}
