import json

import pytest

from soarlink.structures import (
    Content,
    FuncResponse,
    Function,
    FunctionCall,
    InboundDestination,
    LastModifiedBy,
    MessageDestination,
    Org,
    Results,
    SessionResponse,
    Tag,
    TagHandle,
)


def test_session_from_dict_reads_nested_orgs():
    session = SessionResponse.from_dict(
        {"api_key_handle": 444, "orgs": [{"id": 1234, "name": "acme"}], "client_id": "cid"}
    )
    assert session.api_key_handle == 444
    assert session.orgs[0].id == 1234
    assert session.orgs[0].name == "acme"
    assert session.client_id == "cid"


def test_session_round_trip():
    session = SessionResponse(
        api_key_handle=444,
        orgs=[Org(id=1234, last_modified_by=LastModifiedBy(id=7, name="admin"))],
        display_name="integration",
    )
    assert SessionResponse.from_dict(json.loads(json.dumps(session.to_dict()))) == session


def test_missing_and_null_fields_take_zero_values():
    assert SessionResponse.from_dict({}) == SessionResponse()
    assert SessionResponse.from_dict({"orgs": None, "client_id": None}) == SessionResponse()


def test_unknown_keys_are_ignored():
    md = MessageDestination.from_dict({"api_keys": [42], "users": [1, 2], "tags": []})
    assert md == MessageDestination(api_keys=[42])


@pytest.mark.parametrize(
    "data",
    [
        {"api_key_handle": "placeholder"},
        {"api_key_handle": 4.5},
        {"api_key_handle": True},
        {"orgs": {}},
        {"orgs": [5]},
        {"client_id": 3},
    ],
)
def test_wrong_types_raise(data):
    with pytest.raises(ValueError):
        SessionResponse.from_dict(data)


def test_non_object_raises():
    with pytest.raises(ValueError):
        Org.from_dict([1, 2])


def test_org_reads_last_modified_by_and_any_fields():
    org = Org.from_dict(
        {"id": 99, "last_modified_by": {"id": 3, "type": "user"}, "perms": {"x": True}, "zip": None}
    )
    assert org.id == 99
    assert org.last_modified_by == LastModifiedBy(id=3, type="user")
    assert org.perms == {"x": True}
    assert org.zip is None


def test_message_destination_round_trip():
    md = MessageDestination(id=5, name="http", programmatic_name="http", expect_ack=True, api_keys=[42])
    assert MessageDestination.from_dict(md.to_dict()) == md


def test_message_destination_rejects_non_integer_keys():
    with pytest.raises(ValueError):
        MessageDestination.from_dict({"api_keys": ["placeholder"]})


def test_inbound_destination_round_trip_through_json():
    dest = InboundDestination(read_principals=[42], write_principals=[42, 7], version=3, tags=["t"])
    decoded = InboundDestination.from_dict(json.loads(json.dumps(dest.to_dict())))
    assert decoded == dest


def test_function_call_from_json_bytes():
    body = json.dumps(
        {
            "function": {
                "name": "http_request",
                "id": 11,
                "tags": [{"tag_handle": {"id": 2, "name": "t"}, "value": "v"}],
            },
            "inputs": {"http_method": "GET", "http_url": "https://example.com"},
            "workflow_instance": {"workflow_instance_id": 8, "workflow": {"workflow_id": 4}},
        }
    ).encode()
    call = FunctionCall.from_json(body)
    assert call.function.name == "http_request"
    assert call.function.tags == [Tag(tag_handle=TagHandle(id=2, name="t"), value="v")]
    assert call.inputs == {"http_method": "GET", "http_url": "https://example.com"}
    assert call.workflow_instance.workflow_instance_id == 8
    assert call.workflow_instance.workflow.workflow_id == 4


def test_function_call_round_trip():
    call = FunctionCall(function=Function(name="f", id=1), inputs={"a": 1}, groups=["g"])
    assert FunctionCall.from_json(json.dumps(call.to_dict())) == call


def test_function_call_null_body_is_empty_call():
    assert FunctionCall.from_json("null") == FunctionCall()


@pytest.mark.parametrize("text", ["{not json", "[]", '"text"'])
def test_function_call_invalid_json_raises(text):
    with pytest.raises(ValueError):
        FunctionCall.from_json(text)


def test_func_response_without_results_omits_key():
    response = FuncResponse(message_type=0, message="x", complete=False)
    assert "results" not in response.to_dict()
    assert response.to_json() == '{"message_type":0,"message":"x","complete":false}'


def test_func_response_with_results_encodes_all_result_fields():
    response = FuncResponse(
        message_type=2, message="done", complete=True, results=Results(version=2.0, success=True, content="body")
    )
    decoded = json.loads(response.to_json())
    assert list(decoded["results"]) == ["version", "success", "reason", "content", "raw", "inputs", "metrics"]
    assert decoded["results"]["content"] == "body"
    assert decoded["results"]["version"] == 2.0
    assert decoded["results"]["inputs"]["timer_epoch"] is None
    assert FuncResponse.from_dict(decoded) == response


def test_func_response_escapes_html_characters():
    encoded = FuncResponse(message="<a&b>").to_json()
    assert "\\u003ca\\u0026b\\u003e" in encoded
    assert json.loads(encoded)["message"] == "<a&b>"


def test_func_response_keeps_non_ascii_text():
    encoded = FuncResponse(message="café").to_json()
    assert "café" in encoded


def test_content_uses_spaced_key():
    content = Content.from_dict({"Workflow Status": {"instance_id": 5, "status": "running"}})
    assert content.workflow_status.instance_id == 5
    assert content.workflow_status.status == "running"
    assert Content.from_dict(content.to_dict()) == content