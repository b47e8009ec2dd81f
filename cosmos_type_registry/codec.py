from __future__ import annotations

from typing import List

from google.protobuf import any_pb2
from google.protobuf.json_format import MessageToJson
from google.protobuf.message import Message

from cosmpy.protos.cosmos.authz.v1beta1.tx_pb2 import MsgExec
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import TxBody, TxRaw

from cosmos_type_registry.registry import TypeRegistry, type_url_of


def create_any_msg(msg: Message) -> any_pb2.Any:
    any_msg = any_pb2.Any()
    any_msg.Pack(msg, "")
    return any_msg


def create_exec_msg(msg: Message, grantee_address: str) -> MsgExec:
    authz_exec_any = create_any_msg(msg)
    return MsgExec(grantee=grantee_address, msgs=[authz_exec_any])


def unpack_any(any_msg: any_pb2.Any, registry: TypeRegistry) -> Message:
    """Decode an Any into the message class registered for its type url.

    Raises UnknownTypeUrl when the registry has no such type; decode errors
    from the protobuf runtime propagate unchanged.
    """
    descriptor = registry.resolve(any_msg.type_url)
    return descriptor.FromString(any_msg.value)


def decode_tx_messages(tx_bytes: bytes, registry: TypeRegistry) -> List[Message]:
    tx_raw = TxRaw.FromString(tx_bytes)
    body = TxBody.FromString(tx_raw.body_bytes)
    return [unpack_any(any_msg, registry) for any_msg in body.messages]


def expand_exec(msg: Message, registry: TypeRegistry) -> List[Message]:
    """Flatten authz MsgExec wrappers into the messages they carry."""
    if not isinstance(msg, MsgExec):
        return [msg]
    expanded = []
    for any_msg in msg.msgs:
        expanded.extend(expand_exec(unpack_any(any_msg, registry), registry))
    return expanded


def format_tx_messages(tx_bytes: bytes, registry: TypeRegistry) -> List[str]:
    """Printable lines for each message of a tx, with MsgExec contents expanded."""
    lines = []
    for i, msg in enumerate(decode_tx_messages(tx_bytes, registry)):
        lines.append(f"Message {i}: {type_url_of(msg)}")
        for inner in expand_exec(msg, registry):
            if inner is not msg:
                lines.append(f"  Exec message: {type_url_of(inner)}")
            lines.append(MessageToJson(inner, preserving_proto_field_name=True))
    return lines
