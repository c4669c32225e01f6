"""Lifespan helper: run the gatekeeper container for the life of a FastAPI app."""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI

from gatekeeper.container import GatekeeperContainer

logger = logging.getLogger(__name__)


def create_lifespan(
    container: GatekeeperContainer,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Return a lifespan that starts container, exposes it as app.state.gatekeeper, then shuts it down."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ---- Startup ----
        await container.startup()
        app.state.gatekeeper = container

        yield

        # ---- Shutdown ----
        await container.shutdown()
        app.state.gatekeeper = None
        logger.info("Gatekeeper shut down")

    return lifespan
