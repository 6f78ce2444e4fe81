"""Data structures exchanged with the SOAR REST API and its message queue.

Every structure decodes from the JSON object the server sends and encodes
back to the same keys. Missing or null members take the zero value of
their type and unknown members are ignored; a member of the wrong type
raises ``ValueError``.
"""

import json
from dataclasses import dataclass, field, fields
from types import UnionType
from typing import Any, Mapping, Union, get_args, get_origin

_JSON_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026", "\u2028": "\\u2028", "\u2029": "\\u2029"}


def dumps(value: Any) -> str:
    """Encode ``value`` as compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return "".join(_JSON_ESCAPES.get(char, char) for char in text)


def _decode(tp: Any, value: Any, key: str, nullable: bool = True) -> Any:
    if tp is Any:
        return value
    origin = get_origin(tp)
    if origin in (Union, UnionType):
        (inner,) = [arg for arg in get_args(tp) if arg is not type(None)]
        return None if value is None else _decode(inner, value, key)
    if origin is list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError(f"field {key!r}: expected an array, got {value!r}")
        (item,) = get_args(tp)
        return [_decode(item, element, key, nullable=False) for element in value]
    if issubclass(tp, _Record):
        return tp.from_dict(value)
    if value is None and nullable:
        return tp()
    accepted = (int, float) if tp is float else tp
    if not isinstance(value, accepted) or (tp is not bool and isinstance(value, bool)):
        raise ValueError(f"field {key!r}: expected {tp.__name__}, got {value!r}")
    return tp(value)


def _encode(value: Any) -> Any:
    if isinstance(value, _Record):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode(item) for item in value]
    return value


def _load(cls: type, data: Any) -> Any:
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{cls.__name__}: expected a JSON object, got {type(data).__name__}")
    values = {}
    for f in fields(cls):
        key = f.metadata.get("key", f.name)
        values[f.name] = _decode(f.type, data.get(key), key)
    return cls(**values)


def _dump(record: Any) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if value is None and f.metadata.get("omitempty"):
            continue
        data[f.metadata.get("key", f.name)] = _encode(value)
    return data


class _Record:
    """Shared JSON decoding and encoding for the dataclasses below."""

    @classmethod
    def from_dict(cls, data: Any):
        return _load(cls, data)

    def to_dict(self) -> dict[str, Any]:
        return _dump(self)


@dataclass
class LastModifiedBy(_Record):
    id: int = 0
    type: str = ""
    name: str = ""
    display_name: str = ""


@dataclass
class Org(_Record):
    id: int = 0
    name: str = ""
    addr: Any = None
    addr2: Any = None
    city: Any = None
    state: Any = None
    zip: Any = None
    attachments_enabled: bool = False
    final_phase_required: bool = False
    tasks_private: bool = False
    has_saml: bool = False
    require_saml: bool = False
    twofactor_auth_domain: Any = None
    has_available_twofactor: bool = False
    authorized_ldap_group: Any = None
    supports_ldap: bool = False
    incident_deletion_allowed: bool = False
    configuration_type: str = ""
    parent_org: Any = None
    session_timeout: int = 0
    last_modified_by: LastModifiedBy = field(default_factory=LastModifiedBy)
    last_modified_time: int = 0
    uuid: str = ""
    timezone: Any = None
    cloud_account: Any = None
    perms: Any = None
    effective_permissions: list[Any] = field(default_factory=list)
    role_handles: list[Any] = field(default_factory=list)
    enabled: bool = False
    twofactor_cookie_lifetime_secs: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Org":
        return _load(cls, data)


@dataclass
class SessionResponse(_Record):
    """The answer to ``GET /rest/session``."""

    orgs: list[Org] = field(default_factory=list)
    password_expiration_date: int = 0
    api_key_handle: int = 0
    client_id: str = ""
    display_name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "SessionResponse":
        return _load(cls, data)

    def to_dict(self) -> dict[str, Any]:
        return _dump(self)


@dataclass
class MessageDestination(_Record):
    id: int = 0
    name: str = ""
    programmatic_name: str = ""
    destination_type: int = 0
    expect_ack: bool = False
    uuid: str = ""
    export_key: str = ""
    api_keys: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "MessageDestination":
        return _load(cls, data)

    def to_dict(self) -> dict[str, Any]:
        return _dump(self)


@dataclass
class InboundDestination(_Record):
    id: int = 0
    display_name: str = ""
    name: str = ""
    write_principals: list[int] = field(default_factory=list)
    read_principals: list[int] = field(default_factory=list)
    uuid: str = ""
    tags: list[Any] = field(default_factory=list)
    version: int = 0
    export_key: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "InboundDestination":
        return _load(cls, data)

    def to_dict(self) -> dict[str, Any]:
        return _dump(self)


@dataclass
class TagHandle(_Record):
    display_name: str = ""
    id: int = 0
    name: str = ""


@dataclass
class Tag(_Record):
    tag_handle: TagHandle = field(default_factory=TagHandle)
    value: str = ""


@dataclass
class Function(_Record):
    creator: Any = None
    description: Any = None
    display_name: str = ""
    id: int = 0
    name: str = ""
    output_description: Any = None
    tags: list[Tag] = field(default_factory=list)
    uuid: Any = None
    version: Any = None
    view_items: list[Any] = field(default_factory=list)
    workflows: list[Any] = field(default_factory=list)


@dataclass
class PlaybookInstance(_Record):
    is_playbook_deleted: bool = False
    playbook_activation_type: str = ""
    playbook_display_name: str = ""
    playbook_id: int = 0
    playbook_instance_id: int = 0


@dataclass
class Principal(_Record):
    display_name: str = ""
    id: int = 0
    name: str = ""
    type: str = ""


@dataclass
class ObjectType(_Record):
    id: int = 0
    name: str = ""


@dataclass
class Workflow(_Record):
    actions: list[Any] = field(default_factory=list)
    description: Any = None
    name: str = ""
    object_type: ObjectType = field(default_factory=ObjectType)
    programmatic_name: str = ""
    tags: list[Any] = field(default_factory=list)
    uuid: Any = None
    workflow_id: int = 0


@dataclass
class WorkflowInstance(_Record):
    workflow: Workflow = field(default_factory=Workflow)
    workflow_instance_id: int = 0


@dataclass
class FunctionCall(_Record):
    """A function invocation delivered through a message destination."""

    function: Function = field(default_factory=Function)
    groups: list[Any] = field(default_factory=list)
    inputs: Any = None
    playbook_instance: PlaybookInstance = field(default_factory=PlaybookInstance)
    principal: Principal = field(default_factory=Principal)
    workflow: Workflow = field(default_factory=Workflow)
    workflow_instance: WorkflowInstance = field(default_factory=WorkflowInstance)

    @classmethod
    def from_dict(cls, data: Any) -> "FunctionCall":
        return _load(cls, data)

    @classmethod
    def from_json(cls, text: str | bytes) -> "FunctionCall":
        """Decode a function call from a JSON message body."""
        return cls.from_dict(json.loads(text))


@dataclass
class WorkflowStatus(_Record):
    instance_id: int = 0
    status: str = ""
    start_date: int = 0
    end_date: Any = None
    reason: Any = None
    is_terminated: bool = False


@dataclass
class Content(_Record):
    workflow_status: WorkflowStatus = field(
        default_factory=WorkflowStatus, metadata={"key": "Workflow Status"}
    )


@dataclass
class ResultInputs(_Record):
    timer_time: str = ""
    timer_epoch: Any = None


@dataclass
class Metrics(_Record):
    version: str = ""
    package: str = ""
    package_version: str = ""
    host: str = ""
    execution_time_ms: int = 0
    timestamp: str = ""


@dataclass
class Results(_Record):
    """The result payload attached to a completed function response."""

    version: float = 0.0
    success: bool = False
    reason: Any = None
    content: Any = None
    raw: Any = None
    inputs: ResultInputs = field(default_factory=ResultInputs)
    metrics: Metrics = field(default_factory=Metrics)

    def to_dict(self) -> dict[str, Any]:
        return _dump(self)


@dataclass
class FuncResponse(_Record):
    """A status update or final result sent back for a function call."""

    message_type: int = 0
    message: str = ""
    complete: bool = False
    results: Results | None = field(default=None, metadata={"omitempty": True})

    def to_dict(self) -> dict[str, Any]:
        return _dump(self)

    def to_json(self) -> str:
        """Encode as the compact JSON body sent to the acknowledgement queue."""
        return dumps(self.to_dict())