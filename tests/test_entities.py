"""Tests for entity models and the EntityList context."""

import pytest

from octane_sdk.entities import (
    EntityCollection,
    EntityList,
    EntityModel,
    MultiReference,
    TypedEntityList,
    join_url,
)
from octane_sdk.exceptions import OctanePartialError
from octane_sdk.query import Query

BASE = "http://octane.test/api/shared_spaces/1001/workspaces/1002"


def make_list(http_client, name="defects") -> EntityList:
    return EntityList(http_client, BASE, name)


class TestJoinUrl:
    def test_joins_segments(self):
        assert join_url("http://h/a", "b", 3) == "http://h/a/b/3"

    def test_absorbs_trailing_slash(self):
        assert join_url("http://h/a/", "b") == "http://h/a/b"

    def test_skips_empty_segments(self):
        assert join_url("http://h/a/", "") == "http://h/a"


class TestEntityModel:
    def test_shortcuts(self):
        model = EntityModel({"id": 1001, "type": "defect", "name": "crash"})
        assert model.id == "1001"
        assert model.type == "defect"
        assert model.name == "crash"

    def test_reference_fields_are_models(self):
        model = EntityModel.from_json({"id": "1", "release": {"type": "release", "id": "7"}})
        release = model.get_value("release")
        assert isinstance(release, EntityModel)
        assert release.id == "7"

    def test_multi_reference_round_trip(self):
        data = {"id": "1", "taggings": {"data": [{"type": "user_tag", "id": "3"}]}}
        model = EntityModel.from_json(data)
        assert isinstance(model.get_value("taggings"), list)
        assert model.to_json() == data

    def test_empty_multi_reference_round_trip(self):
        data = {"id": "1", "taggings": {"data": []}}
        model = EntityModel.from_json(data)
        assert model.get_value("taggings") == []
        assert model.to_json() == data

    def test_clearing_multi_reference(self):
        model = EntityModel.from_json({"id": "1", "taggings": {"data": [{"type": "user_tag", "id": "3"}]}})
        model.set_value("taggings", MultiReference())
        assert model.to_json() == {"id": "1", "taggings": {"data": []}}

    def test_set_value_chains_and_wraps(self):
        model = EntityModel().set_value("name", "x").set_value("owner", {"type": "workspace_user", "id": "9"})
        assert model.to_json() == {"name": "x", "owner": {"type": "workspace_user", "id": "9"}}

    def test_reference_constructor(self):
        assert EntityModel.reference("release", 5).to_json() == {"type": "release", "id": "5"}

    def test_item_access(self):
        model = EntityModel(name="x")
        model["severity"] = "high"
        assert model["severity"] == "high"
        assert "severity" in model
        model.remove_value("severity")
        assert model.fields() == ["name"]


class TestEntityCollection:
    def test_from_response(self):
        collection = EntityCollection.from_response(
            {"total_count": 12, "exceeds_total_count": False, "data": [{"id": "1"}, {"id": "2"}]}
        )
        assert [m.id for m in collection] == ["1", "2"]
        assert collection.total_count == 12

    def test_total_defaults_to_length(self):
        assert EntityCollection.from_response({"data": [{"id": "1"}]}).total_count == 1

    def test_total_count_known(self):
        assert EntityCollection.from_response({"total_count": 3, "data": []}).total_count_known
        assert not EntityCollection.from_response({"data": []}).total_count_known

    def test_none_response(self):
        assert EntityCollection.from_response(None) == []


class TestEntityListGet:
    def test_plain_get(self, http_client):
        http_client.request.return_value = {"total_count": 1, "data": [{"id": "5"}]}

        result = make_list(http_client).get()

        http_client.request.assert_called_once_with("GET", f"{BASE}/defects", params=None)
        assert result[0].id == "5"

    def test_get_with_parameters(self, http_client):
        http_client.request.return_value = {"total_count": 0, "data": []}

        make_list(http_client).get(
            query=Query.statement("name", "EQ", "crash"),
            fields=["name", "severity"],
            order_by=["-id", "name"],
            limit=10,
            offset=20,
        )

        http_client.request.assert_called_once_with(
            "GET",
            f"{BASE}/defects",
            params={
                "query": '"name EQ ^crash^"',
                "fields": "name,severity",
                "order_by": "-id,name",
                "limit": 10,
                "offset": 20,
            },
        )

    def test_offset_zero_is_sent(self, http_client):
        http_client.request.return_value = {"data": []}
        make_list(http_client).get(offset=0)
        assert http_client.request.call_args[1]["params"] == {"offset": 0}


class TestEntityListIterAll:
    def test_pages_until_total(self, http_client):
        http_client.request.side_effect = [
            {"total_count": 5, "data": [{"id": "1"}, {"id": "2"}]},
            {"total_count": 5, "data": [{"id": "3"}, {"id": "4"}]},
            {"total_count": 5, "data": [{"id": "5"}]},
        ]

        ids = [m.id for m in make_list(http_client).iter_all(page_size=2)]

        assert ids == ["1", "2", "3", "4", "5"]
        offsets = [c[1]["params"]["offset"] for c in http_client.request.call_args_list]
        assert offsets == [0, 2, 4]

    def test_stops_on_empty_page(self, http_client):
        http_client.request.side_effect = [
            {"total_count": 10, "data": [{"id": "1"}]},
            {"total_count": 10, "data": []},
        ]

        assert len(list(make_list(http_client).iter_all(page_size=1))) == 1
        assert http_client.request.call_count == 2

    def test_pages_without_total_count_until_short_page(self, http_client):
        http_client.request.side_effect = [
            {"data": [{"id": "1"}, {"id": "2"}]},
            {"data": [{"id": "3"}, {"id": "4"}]},
            {"data": [{"id": "5"}]},
        ]

        ids = [m.id for m in make_list(http_client).iter_all(page_size=2)]

        assert ids == ["1", "2", "3", "4", "5"]
        assert http_client.request.call_count == 3

    def test_pages_without_total_count_until_empty_page(self, http_client):
        http_client.request.side_effect = [
            {"data": [{"id": "1"}, {"id": "2"}]},
            {"data": []},
        ]

        assert len(list(make_list(http_client).iter_all(page_size=2))) == 2
        assert http_client.request.call_count == 2

    def test_rejects_bad_page_size(self, http_client):
        with pytest.raises(ValueError):
            list(make_list(http_client).iter_all(page_size=0))


class TestEntityListWrites:
    def test_create(self, http_client):
        http_client.request.return_value = {"total_count": 1, "data": [{"id": "77", "name": "new"}]}

        created = make_list(http_client).create(EntityModel(name="new"))

        http_client.request.assert_called_once_with(
            "POST", f"{BASE}/defects", json={"data": [{"name": "new"}]}
        )
        assert created[0].id == "77"

    def test_create_partial_failure(self, http_client):
        http_client.request.return_value = {
            "data": [{"id": "1"}],
            "errors": [{"error_code": "platform.missing_required_fields", "index": 1}],
        }

        with pytest.raises(OctanePartialError) as exc_info:
            make_list(http_client).create([EntityModel(name="a"), EntityModel()])

        assert exc_info.value.entities == [{"id": "1"}]
        assert exc_info.value.errors[0]["index"] == 1

    def test_update_by_query(self, http_client):
        http_client.request.return_value = {"data": []}

        make_list(http_client).update(EntityModel(severity="low"), query="id EQ 1")

        http_client.request.assert_called_once_with(
            "PUT", f"{BASE}/defects", params={"query": '"id EQ 1"'}, json={"data": [{"severity": "low"}]}
        )

    def test_delete_requires_query(self, http_client):
        with pytest.raises(ValueError):
            make_list(http_client).delete(None)

    def test_delete(self, http_client):
        make_list(http_client).delete(Query.statement("id", "EQ", 3))
        http_client.request.assert_called_once_with(
            "DELETE", f"{BASE}/defects", params={"query": '"id EQ 3"'}
        )


class TestEntityAt:
    def test_get_with_fields(self, http_client):
        http_client.request.return_value = {"id": "3", "type": "defect"}

        model = make_list(http_client).at(3).get(fields=["name"])

        http_client.request.assert_called_once_with("GET", f"{BASE}/defects/3", params={"fields": "name"})
        assert model.id == "3"

    def test_update(self, http_client):
        http_client.request.return_value = {"id": "3", "name": "renamed"}

        model = make_list(http_client).at("3").update(EntityModel(name="renamed"))

        http_client.request.assert_called_once_with("PUT", f"{BASE}/defects/3", json={"name": "renamed"})
        assert model.name == "renamed"

    def test_delete(self, http_client):
        make_list(http_client).at(3).delete()
        http_client.request.assert_called_once_with("DELETE", f"{BASE}/defects/3")


class TestTypedEntityList:
    def test_requires_entity_name(self, http_client):
        with pytest.raises(ValueError):
            TypedEntityList(http_client, BASE)

    def test_subclass(self, http_client):
        class Releases(TypedEntityList):
            entity_name = "releases"

        assert Releases(http_client, BASE).url == f"{BASE}/releases"
