"""Tests for the Octane context and its builder."""

import dataclasses
import uuid
from unittest.mock import MagicMock

import pytest

from octane_sdk.attachments import AttachmentList
from octane_sdk.context import (
    NO_ENTITY,
    NO_WORKSPACE_ID,
    ONLY_SHARED_SPACE_WORKSPACE_ID,
    Builder,
    OctaneConfiguration,
)
from octane_sdk.entities import EntityList, TypedEntityList
from octane_sdk.manual_tests import ManualTests
from octane_sdk.metadata import Metadata

from conftest import SERVER_URL


class Defects(TypedEntityList):
    entity_name = "defects"


class TestBaseUrl:
    def test_no_shared_space(self, builder):
        octane = builder.build()
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces"

    def test_shared_space_only(self, builder):
        octane = builder.shared_space(1001).build()
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces/1001/"

    def test_explicit_shared_space_only_workspace(self, builder):
        octane = builder.shared_space(1001).work_space(ONLY_SHARED_SPACE_WORKSPACE_ID).build()
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces/1001/"

    def test_list_workspaces(self, builder):
        octane = builder.shared_space(1001).work_space(NO_WORKSPACE_ID).build()
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces/1001/workspaces"

    def test_workspace(self, builder):
        octane = builder.shared_space(1001).work_space(1002).build()
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces/1001/workspaces/1002"

    @pytest.mark.parametrize("workspace_id", [1, -1, 2 ** 63 - 1, NO_WORKSPACE_ID + 1])
    def test_any_concrete_workspace(self, builder, workspace_id):
        octane = builder.shared_space(7).work_space(workspace_id).build()
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces/7/workspaces/{workspace_id}"

    def test_uuid_shared_space(self, builder):
        space = uuid.UUID("12345678-1234-5678-1234-567812345678")
        octane = builder.shared_space(space).work_space(1002).build()
        assert octane.base_url == (
            f"{SERVER_URL}/api/shared_spaces/12345678-1234-5678-1234-567812345678/workspaces/1002"
        )

    def test_workspace_without_shared_space_is_ignored(self, builder):
        octane = builder.work_space(1002).build()
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces"

    @pytest.mark.parametrize("domain", ["http://h/", "http://h", "https://octane.example.com:8080/qa"])
    def test_domain_is_used_as_given(self, configuration, domain):
        assert Builder(configuration, domain).build().base_url == f"{domain}/api/shared_spaces"
        octane = Builder(configuration, domain).shared_space(1).work_space(2).build()
        assert octane.base_url == f"{domain}/api/shared_spaces/1/workspaces/2"

    def test_empty_shared_space_id_means_none(self, configuration):
        from octane_sdk.context import Octane

        octane = Octane(configuration, SERVER_URL, "", 1002)
        assert octane.base_url == f"{SERVER_URL}/api/shared_spaces"


class TestBuilder:
    def test_setters_chain(self, builder):
        assert builder.shared_space(1) is builder
        assert builder.work_space(2) is builder

    def test_none_shared_space_raises(self, builder):
        with pytest.raises(TypeError):
            builder.shared_space(None)

    def test_string_shared_space_raises(self, builder):
        with pytest.raises(TypeError):
            builder.shared_space("1001")

    def test_bool_shared_space_raises(self, builder):
        with pytest.raises(TypeError):
            builder.shared_space(True)

    def test_none_workspace_raises(self, builder):
        with pytest.raises(TypeError):
            builder.work_space(None)

    def test_str(self, builder):
        builder.shared_space(1001).work_space(1002)
        assert str(builder) == f"Server: {SERVER_URL} SharedSpace: 1001 Workspace: 1002"

    def test_str_defaults(self, builder):
        assert str(builder) == f"Server: {SERVER_URL} SharedSpace: None Workspace: 0"

    def test_build_twice_gives_independent_contexts(self, builder):
        first = builder.shared_space(1001).build()
        second = builder.work_space(5).build()
        assert first.base_url.endswith("/1001/")
        assert second.base_url.endswith("/workspaces/5")


class TestOctaneContext:
    def test_context_is_immutable(self, workspace):
        with pytest.raises(dataclasses.FrozenInstanceError):
            workspace.workspace_id = 5
        with pytest.raises(dataclasses.FrozenInstanceError):
            workspace.base_url = "http://elsewhere"

    def test_entity_list(self, workspace, http_client):
        defects = workspace.entity_list("defects")
        assert isinstance(defects, EntityList)
        assert defects.url == f"{SERVER_URL}/api/shared_spaces/1001/workspaces/1002/defects"
        assert defects.http_client is http_client

    def test_entity_list_under_shared_space_has_no_double_slash(self, builder):
        octane = builder.shared_space(1001).build()
        assert octane.entity_list("workspaces").url == f"{SERVER_URL}/api/shared_spaces/1001/workspaces"

    def test_no_entity_addresses_the_context(self, builder):
        admin = builder.shared_space(1001).work_space(NO_WORKSPACE_ID).build()
        assert admin.entity_list(NO_ENTITY).url == f"{SERVER_URL}/api/shared_spaces/1001/workspaces"

    def test_typed_entity_list(self, workspace):
        defects = workspace.entity_list(Defects)
        assert isinstance(defects, Defects)
        assert defects.url.endswith("/workspaces/1002/defects")

    def test_entity_list_uses_configured_factory(self, http_client):
        factory = MagicMock(return_value="custom")
        octane = Builder(OctaneConfiguration(http_client, factory), SERVER_URL).shared_space(1).work_space(2).build()

        assert octane.entity_list("tests") == "custom"
        factory.assert_called_once_with(http_client, f"{SERVER_URL}/api/shared_spaces/1/workspaces/2", "tests")

    def test_metadata(self, workspace):
        metadata = workspace.metadata()
        assert isinstance(metadata, Metadata)
        assert metadata.url == f"{SERVER_URL}/api/shared_spaces/1001/workspaces/1002/metadata"

    def test_attachment_list(self, workspace):
        attachments = workspace.attachment_list()
        assert isinstance(attachments, AttachmentList)
        assert attachments.url == f"{SERVER_URL}/api/shared_spaces/1001/workspaces/1002/attachments"

    def test_manual_tests(self, workspace):
        manual_tests = workspace.manual_tests()
        assert isinstance(manual_tests, ManualTests)
        assert manual_tests.script_url(5) == f"{SERVER_URL}/api/shared_spaces/1001/workspaces/1002/tests/5/script"

    def test_url_appends_segments(self, workspace):
        assert workspace.url("defects", 3) == f"{SERVER_URL}/api/shared_spaces/1001/workspaces/1002/defects/3"

    def test_sign_out_delegates(self, workspace, http_client):
        workspace.sign_out()
        http_client.sign_out.assert_called_once_with()
