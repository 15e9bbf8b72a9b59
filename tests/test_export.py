from __future__ import annotations

import os

import pytest

from rpcdocs.method import Method, RestMapping, export_method
from rpcdocs.render import Templates
from rpcdocs.schema import Placement
from rpcdocs.service import DescriptorSetExtractor
from tests._builders import enum, enum_ref, lightning_descriptor_set, message, message_ref, registry_of, scalar


class RecordingTemplates:
    """Stands in for the rendering engine and records what it was given."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    def render_method(self, method, file_path: str) -> None:
        if self.error is not None:
            raise self.error
        placements = {f.name: f.rest_placement for f in method.request().fields}
        self.calls.append((method.name, file_path, placements))


@pytest.fixture
def registry():
    return registry_of(
        message("lnrpc.ChanPoint", scalar("funding_txid", 1), scalar("output_index", 2, "uint32")),
        message("lnrpc.Empty"),
    )


def method_for(registry, name: str, mapping: RestMapping | None) -> Method:
    return Method(
        registry,
        name=name,
        request_type="ChanPoint",
        request_full_type="lnrpc.ChanPoint",
        response_type="Empty",
        response_full_type="lnrpc.Empty",
        rest_mappings=[mapping] if mapping else None,
    )


def test_export_uses_kebab_case_file_name(registry, tmp_path) -> None:
    templates = RecordingTemplates()

    path = export_method(method_for(registry, "OpenChannelSync", None), str(tmp_path), templates)

    assert path == os.path.join(str(tmp_path), "open-channel-sync.mdx")
    assert templates.calls[0][1] == path


def test_shared_request_gets_the_mapping_of_the_exported_method(registry, tmp_path) -> None:
    templates = RecordingTemplates()
    abandon = method_for(registry, "AbandonChannel", RestMapping(method="DELETE", path="/v1/channels/abandon/{funding_txid}"))
    close = method_for(registry, "CloseChannel", RestMapping(method="POST", path="/v1/channels/close", body="*"))

    export_method(abandon, str(tmp_path), templates)
    export_method(close, str(tmp_path), templates)

    assert templates.calls[0][2] == {"funding_txid": Placement.PATH, "output_index": Placement.QUERY}
    assert templates.calls[1][2] == {"funding_txid": Placement.BODY, "output_index": Placement.BODY}


def test_empty_mapping_is_not_applied(registry, tmp_path) -> None:
    templates = RecordingTemplates()

    export_method(method_for(registry, "Foo", RestMapping(method="GET", path="")), str(tmp_path), templates)

    assert set(templates.calls[0][2].values()) == {Placement.UNKNOWN}


def test_render_errors_propagate_unchanged(registry, tmp_path) -> None:
    error = OSError("disk full")

    with pytest.raises(OSError) as excinfo:
        export_method(method_for(registry, "GetInfo", None), str(tmp_path), RecordingTemplates(error))

    assert excinfo.value is error


def test_templates_render_method_document(tmp_path) -> None:
    registry = registry_of(
        message(
            "lnrpc.ListRequest",
            scalar("active_only", 1, "bool"),
            message_ref("peer", 2, "lnrpc.Peer"),
        ),
        message("lnrpc.ListResponse", message_ref("peers", 1, "lnrpc.Peer", label="repeated")),
        message("lnrpc.Peer", scalar("pub_key", 1), enum_ref("sync_type", 2, "lnrpc.SyncType")),
        enum("lnrpc.SyncType", "UNKNOWN_SYNC", "ACTIVE_SYNC"),
    )
    method = Method(
        registry,
        name="ListPeers",
        description="lncli: `listpeers`\nDEPRECATED: ListPeers returns a verbose listing of all connected peers.",
        request_type="ListRequest",
        request_full_type="lnrpc.ListRequest",
        response_type="ListResponse",
        response_full_type="lnrpc.ListResponse",
        response_streaming=True,
        rest_mappings=[RestMapping(method="GET", path="/v1/peers")],
    )

    path = export_method(method, str(tmp_path / "lightning"), Templates())

    with open(path, encoding="utf-8") as f:
        content = f.read()
    assert content.startswith("---\ntitle: \"ListPeers\"")
    assert "This RPC is deprecated." in content
    assert "$ lncli listpeers" in content
    assert "This is a server-streaming RPC." in content
    assert "| `GET` | `/v1/peers` |" in content
    assert "| `active_only` | `bool` | `bool` | query |" in content
    assert "| `peers` | `repeated Peer` |" in content
    assert "### lnrpc.Peer" in content
    assert "### lnrpc.SyncType" in content
    assert "| `ACTIVE_SYNC` | 1 |" in content


def test_templates_dir_overrides_bundled_templates(tmp_path, registry) -> None:
    templates_dir = tmp_path / "templates"
    templates_dir.mkdir()
    (templates_dir / "method.md.jinja").write_text("{{ method.name | snake }}\n", encoding="utf-8")

    path = export_method(method_for(registry, "GetInfo", None), str(tmp_path / "out"), Templates(str(templates_dir)))

    with open(path, encoding="utf-8") as f:
        assert f.read() == "get_info\n"


def test_service_export_writes_methods_and_index(tmp_path) -> None:
    api = DescriptorSetExtractor().extract(lightning_descriptor_set())

    written = api.export_markdown(str(tmp_path), Templates())

    service_dir = os.path.join(str(tmp_path), "lnrpc", "lightning")
    assert written == [
        os.path.join(service_dir, "close-channel.mdx"),
        os.path.join(service_dir, "get-info.mdx"),
        os.path.join(service_dir, "index.mdx"),
    ]
    with open(written[-1], encoding="utf-8") as f:
        index = f.read()
    assert "- [CloseChannel](./close-channel)" in index
    assert "[CloseChannel](./close-channel) |" in index
