from __future__ import annotations

from google.api import http_pb2

from rpcdocs.extract import SourceInfo, clean_comment
from rpcdocs.schema import FieldKind
from rpcdocs.service import DescriptorSetExtractor
from tests._builders import lightning_descriptor_set

SOURCE_URL = "https://github.com/lightningnetwork/lnd/blob/master"


def extract(**kwargs):
    return DescriptorSetExtractor(**kwargs).extract(lightning_descriptor_set())


def test_clean_comment() -> None:
    assert clean_comment(" First line.\n  indented\n\n") == "First line.\n indented"


def test_source_info_locations() -> None:
    file_proto = lightning_descriptor_set().file[1]

    assert SourceInfo(file_proto).location([6, 0]) == "lnrpc/lightning.proto#L31"
    assert SourceInfo(file_proto, SOURCE_URL + "/").location([6, 0]) == (
        f"{SOURCE_URL}/lnrpc/lightning.proto#L31"
    )
    assert SourceInfo(file_proto).location([4, 99]) == "lnrpc/lightning.proto"


def test_registers_all_types_across_files() -> None:
    registry = extract().registry

    assert registry.frozen
    for name in (
        "lnrpc.Status",
        "lnrpc.CloseStatusUpdate",
        "lnrpc.CloseStatusUpdate.Detail",
        "lnrpc.ChannelPoint",
        "lnrpc.CloseChannelRequest",
    ):
        assert name in registry


def test_fields_are_converted() -> None:
    request = extract().registry.get_message("lnrpc.CloseChannelRequest")

    point, force, fee = request.fields
    assert (point.type, point.full_type, point.kind) == ("ChannelPoint", "lnrpc.ChannelPoint", FieldKind.MESSAGE)
    assert (force.type, force.kind) == ("bool", FieldKind.SCALAR)
    assert force.description == "If true, then the channel will be closed forcibly."
    assert fee.type == "uint64"

    details = extract().registry.get_message("lnrpc.CloseStatusUpdate").get_field("details")
    assert details.is_repeated


def test_services_and_methods() -> None:
    api = extract(source_url=SOURCE_URL)

    assert list(api.packages) == ["lnrpc"]
    (service,) = api.services()
    assert service.full_name == "lnrpc.Lightning"
    assert service.description == "Lightning is the main RPC server of the daemon."
    assert [m.name for m in service.methods] == ["CloseChannel", "GetInfo"]

    close = service.methods[0]
    assert close.service == "Lightning"
    assert close.description == "CloseChannel attempts to close an active channel."
    assert close.command_line == "lncli closechannel"
    assert close.source == f"{SOURCE_URL}/lnrpc/lightning.proto#L41"
    assert close.streaming_direction() == "server"
    assert close.request_type == "CloseChannelRequest"


def test_type_sources_follow_declaring_file() -> None:
    close = extract().methods()[0]

    assert close.request_type_source.startswith("lnrpc/lightning.proto")
    assert close.response_type_source == "lnrpc/common.proto#L11"
    assert close.response().source == "lnrpc/common.proto#L11"


def test_rest_mapping_from_method_option() -> None:
    close = extract().methods()[0]

    assert close.rest_method() == "DELETE"
    assert close.rest_path() == "/v1/channels/{channel_point.funding_txid_str}/{channel_point.output_index}"


def test_rest_mapping_from_service_yaml() -> None:
    rules = {"lnrpc.Lightning.GetInfo": [http_pb2.HttpRule(selector="lnrpc.Lightning.GetInfo", get="/v1/getinfo")]}

    get_info = extract(http_rules=rules).methods()[1]

    assert get_info.rest_method() == "GET"
    assert get_info.rest_path() == "/v1/getinfo"


def test_option_rule_wins_over_service_yaml() -> None:
    rules = {"lnrpc.Lightning.CloseChannel": [http_pb2.HttpRule(post="/v2/channels/close", body="*")]}

    close = extract(http_rules=rules).methods()[0]

    assert close.rest_method() == "DELETE"


def test_nested_types_of_extracted_method() -> None:
    close = extract().methods()[0]

    assert [m.full_name for m in close.nested_messages()] == [
        "lnrpc.ChannelPoint",
        "lnrpc.CloseStatusUpdate.Detail",
    ]
    assert [e.full_name for e in close.nested_enums()] == ["lnrpc.Status"]
