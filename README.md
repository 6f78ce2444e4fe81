# soarlink

A small library for talking to an IBM SOAR server from Python.

It has two modules:

- `soarlink.client` talks to the SOAR REST API: it checks that an API key
  works, finds the organisation the key belongs to, and checks whether the
  key may use a given message or inbound destination;
- `soarlink.structures` holds the JSON structures the server exchanges:
  sessions, organisations, destinations, the function calls a playbook sends
  and the responses sent back for them.

## Installing

```
pip install soarlink
```

For running the tests:

```
pip install "soarlink[test]"
pytest
```

## Checking an API key

```python
from soarlink.client import HTTPClient, SoarError

try:
    client = HTTPClient.connect("soar.example.com", "my-key-id", "secret", insecure=True)
except SoarError as exc:
    print(f"cannot use this key: {exc}")
else:
    with client:
        print(client.org.id, client.org.name)
        print(client.message_destination_available("greetings"))
        print(client.inbound_destination_available("incoming"))
```

`HTTPClient.connect` builds a client and at once fetches `GET /rest/session`
with basic authentication. It raises `SoarError` if the server cannot be
reached, answers with a status other than 200, sends a body that does not
decode, or names no organisation for the key. On success `client.session`
holds the `SessionResponse` and `client.org` its first organisation.

Requests time out after 5 seconds unless another `timeout` is given.
`insecure=True` turns certificate checks off, which SOAR servers with
self-signed certificates need. A custom `httpx` transport may be passed as
`transport`, which is handy in tests.

Other calls:

- `request(method, url, data=None)` sends a request to
  `https://<hostname>/rest/<url>`;
- `org_request(method, url, data=None)` sends one below
  `orgs/<org id>/`;
- `get_org()` fetches and checks the session description;
- `message_destination_available(name)` is true when the key's handle is
  among the destination's API keys;
- `inbound_destination_available(name)` is true when the key's handle is
  among both the read and the write principals.

`HTTPClient` is a context manager; leaving the block closes it, as does
`close()`.

## Data structures

Every structure in `soarlink.structures` is a dataclass with a `from_dict`
class method that decodes the server's JSON object. Missing or null members
take the zero value of their type, unknown members are ignored, and a member
of the wrong type raises `ValueError`. `to_dict` encodes back to the same
keys.

A function call arriving from a playbook decodes with
`FunctionCall.from_json(body)`. The answer to it is a `FuncResponse`;
`to_json()` gives the compact JSON body SOAR expects, leaving `results` out
when it is `None`:

```python
from soarlink.structures import FuncResponse, Results

response = FuncResponse(
    message_type=0,
    message="App function completed",
    complete=True,
    results=Results(version=2.0, success=True, content="done"),
)
body = response.to_json()
```

## What it does not do

The package does not connect to SOAR's message queue. It has no listener that
subscribes to a message destination, no ready-made handlers or responses for
function calls, and no command to run. Receiving function calls and sending
the encoded responses back is left to the caller.