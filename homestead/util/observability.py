"""Logfire setup for the API, the realtime channel and the database.

Services log and trace through ``logfire`` directly::

    logfire.info("Invite created", invite_id=invite.id, rental_id=invite.rental_id)

    with logfire.span("chat_broker.publish", chat_id=chat_id):
        ...

Credentials never reach a span: the ``Authorization`` header is not
captured and the WebSocket ``token`` query parameter is redacted.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.requests import HTTPConnection

from homestead.config import Settings

SERVICE_NAME = "homestead-api"

REDACTED_QUERY_PARAMS = frozenset({"token"})


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Cloud sending is decided by ``OBSERVABILITY__SEND_TO_LOGFIRE`` when set,
    otherwise by whether ``OBSERVABILITY__LOGFIRE_TOKEN`` is present.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        send_to_logfire = observability.send_to_logfire
    else:
        send_to_logfire = bool(observability.logfire_token)

    config_kwargs: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if observability.logfire_token:
        config_kwargs["token"] = observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        has_token=bool(observability.logfire_token),
    )


def connection_attributes(
    connection: HTTPConnection, attributes: dict[str, Any]
) -> dict[str, Any]:
    """Span attributes for an HTTP request or a WebSocket handshake."""
    result = {**attributes, "path": connection.url.path}
    # WebSocket scopes carry no method
    method = connection.scope.get("method")
    if method:
        result["method"] = method
    else:
        result["transport"] = "websocket"
    if connection.client:
        result["client_host"] = connection.client.host

    query = {
        key: "[redacted]" if key in REDACTED_QUERY_PARAMS else value
        for key, value in connection.query_params.items()
    }
    if query:
        result["query"] = query
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests and WebSocket handshakes."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=connection_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through the async engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")
