"""Dependency injection container."""

from collections.abc import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from homestead.realtime import ChatBroker
from homestead.util.di import Component, select_providers


def create_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build the application container.

    Settings are loaded from environment variables automatically.

    Args:
        mocked: Components to back with their mock providers. Empty in
            production; tests pass the components they do not exercise.

    Returns:
        Configured DI container, including the FastAPI integration provider
    """
    return make_async_container(*select_providers(mocked), FastapiProvider())


def setup_di(app, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Also creates the application's chat broker on top of the same
    container, so realtime operations share providers with HTTP requests.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
    app.state.chat_broker = ChatBroker(container)
