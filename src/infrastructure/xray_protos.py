"""Generated protobuf and gRPC modules for the subset of the Xray API used here.

The ``.proto`` files under ``protos/`` are trimmed copies of the xray-core
schemas. They are compiled by grpcio-tools the first time this module is
imported; proto paths are resolved against ``sys.path``, so the proto root
is appended to it.
"""

from pathlib import Path
import sys

import grpc


PROTO_ROOT = Path(__file__).resolve().parent / "protos"

if str(PROTO_ROOT) not in sys.path:
    sys.path.append(str(PROTO_ROOT))

typed_message_pb2 = grpc.protos("xray/common/serial/typed_message.proto")
user_pb2 = grpc.protos("xray/common/protocol/user.proto")
shadowsocks_pb2 = grpc.protos("xray/proxy/shadowsocks/config.proto")
handler_pb2, handler_pb2_grpc = grpc.protos_and_services(
    "xray/app/proxyman/command/command.proto"
)
stats_pb2, stats_pb2_grpc = grpc.protos_and_services(
    "xray/app/stats/command/command.proto"
)

HandlerServiceStub = handler_pb2_grpc.HandlerServiceStub
StatsServiceStub = stats_pb2_grpc.StatsServiceStub

TypedMessage = typed_message_pb2.TypedMessage
User = user_pb2.User
ShadowsocksAccount = shadowsocks_pb2.Account
AddUserOperation = handler_pb2.AddUserOperation
RemoveUserOperation = handler_pb2.RemoveUserOperation
AlterInboundRequest = handler_pb2.AlterInboundRequest
AlterInboundResponse = handler_pb2.AlterInboundResponse
Stat = stats_pb2.Stat
QueryStatsRequest = stats_pb2.QueryStatsRequest
QueryStatsResponse = stats_pb2.QueryStatsResponse

ALTER_INBOUND_METHOD = "/xray.app.proxyman.command.HandlerService/AlterInbound"
QUERY_STATS_METHOD = "/xray.app.stats.command.StatsService/QueryStats"

_CIPHER_NAMES = {
    "aes-128-gcm": "AES_128_GCM",
    "aes-256-gcm": "AES_256_GCM",
    "chacha20-poly1305": "CHACHA20_POLY1305",
    "chacha20-ietf-poly1305": "CHACHA20_POLY1305",
    "xchacha20-poly1305": "XCHACHA20_POLY1305",
    "xchacha20-ietf-poly1305": "XCHACHA20_POLY1305",
    "none": "NONE",
    "plain": "NONE",
}

CIPHER_TYPES = {
    cipher: shadowsocks_pb2.CipherType.Value(enum_name)
    for cipher, enum_name in _CIPHER_NAMES.items()
}


def to_typed_message(message) -> "TypedMessage":
    """Wrap a message the way Xray's ``serial.ToTypedMessage`` does."""
    return TypedMessage(
        type=message.DESCRIPTOR.full_name,
        value=message.SerializeToString(),
    )


def cipher_type_for(cipher: str) -> int:
    """Return the CipherType value for a shadowsocks cipher name.

    Raises:
        ValueError: If the cipher is not supported by the Xray API.
    """
    try:
        return CIPHER_TYPES[cipher.strip().lower()]
    except KeyError as exc:
        raise ValueError(f"Unsupported shadowsocks cipher: {cipher}") from exc


__all__ = [
    "ALTER_INBOUND_METHOD",
    "QUERY_STATS_METHOD",
    "CIPHER_TYPES",
    "HandlerServiceStub",
    "StatsServiceStub",
    "TypedMessage",
    "User",
    "ShadowsocksAccount",
    "AddUserOperation",
    "RemoveUserOperation",
    "AlterInboundRequest",
    "AlterInboundResponse",
    "Stat",
    "QueryStatsRequest",
    "QueryStatsResponse",
    "to_typed_message",
    "cipher_type_for",
]
