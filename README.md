# apigen

`apigen` is a small mock HTTP API server. At runtime you register an HTTP
method, a path, a port and a JSON response. `apigen` then starts a server on
that port, or restarts the one already there. That server answers the
registered route with the registered response.

## Installation

```
pip install .
```

## Running

```
apigen
```

This starts the control API on port `8080`, bound to `0.0.0.0`. Two options
change where it listens:

```
apigen --host 127.0.0.1 --port 9000
```

### Logging

The `LOG_LEVEL` environment variable sets the log level. When it is unset,
`apigen` sets it to `TRACE`. The recognised values are `TRACE`, `DEBUG`, `INFO`,
`WARN`, `WARNING`, `ERROR` and `OFF`, in any letter case. `TRACE` logs the same
as `DEBUG`. If the value is a comma-separated list, only the first entry is
used. Any other value falls back to `INFO`.

Each server, the control API included, logs every request as it arrives. It
logs the response too, with its status and latency in milliseconds.

## Control API

| Method | Path        | Purpose                                     |
|--------|-------------|---------------------------------------------|
| GET    | `/health`   | Returns `Up and running...`                 |
| POST   | `/register` | Registers (or replaces) a mocked endpoint   |
| GET    | `/info`     | Lists every registration, grouped by port   |

### Registering an endpoint

```
curl -X POST localhost:8080/register \
     -H 'Content-Type: application/json' \
     -d '{"port": "3000", "method": "GET", "path": "/hello", "response": "Hello World!"}'
```

All four fields are required. `port` and `path` must be strings. `method` is
one of `GET`, `POST`, `PUT`, `PATCH` and `DELETE`, in any letter case.
`response` may be any JSON value.

The reply shows what was added. If an earlier registration for the same port,
method and path was replaced, the reply shows that too:

```json
{
  "added": {"method": "GET", "path": "/hello", "response": "Hello World!"},
  "removed": null
}
```

After that, `curl localhost:3000/hello` returns `"Hello World!"`. The other
registrations already on the port are kept when its server restarts.

Some requests get a `400` reply:

- a body that is not JSON;
- a body with a missing or wrongly typed field, or an unknown method;
- a port that cannot be bound, or that is not a number.

Errors have this shape:

```json
{"status": "FAILED", "failureType": "MalformedJson", "failureMessage": "..."}
```

`failureType` is `MalformedJson` for body errors and `Connection` for port
errors.

### Listing registrations

`GET /info` returns one entry per port:

```json
[
  {"port": "3000", "registrations": [
    {"method": "GET", "path": "/hello", "response": "Hello World!"}
  ]}
]
```

Registrations are held in memory only. They are gone when the process exits.

## Embedding

The control application is an `aiohttp` application, and it can also be built
in code. `apigen.app.create_app(port, app_state)` returns it. The
`apigen.app_state.AppState` you pass in takes a connection establisher.
`apigen.connection.TcpConnectionEstablisher` serves over TCP. To serve some
other way, for instance in tests, subclass
`apigen.connection.ConnectionEstablisher` and implement `connect(port, app)`:

```python
from aiohttp import web

from apigen.app import create_app
from apigen.app_state import AppState
from apigen.connection import TcpConnectionEstablisher

app = create_app("8080", AppState(TcpConnectionEstablisher()))
web.run_app(app, port=8080)
```

## Tests

```
pip install .[test]
pytest
```