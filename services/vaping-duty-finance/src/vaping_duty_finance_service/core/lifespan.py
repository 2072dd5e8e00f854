"""Application lifecycle management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx

from vaping_duty_finance_service.actions.authorised_action import (
    AuthorisationPolicy,
    AuthorisedAction,
)
from vaping_duty_finance_service.auth.connector import AuthClient
from vaping_duty_finance_service.config import get_settings
from vaping_duty_finance_service.core.state import init_app_state
from vaping_duty_finance_service.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    # === STARTUP ===
    settings = get_settings()

    setup_logging(settings.logging.level, settings.logging.directory)
    logger = get_logger(__name__)

    state = init_app_state()

    auth_client = AuthClient(
        base_url=settings.auth.base_url,
        authorise_path=settings.auth.authorise_path,
        timeout_seconds=settings.auth.timeout_seconds,
    )
    state.auth_client = auth_client

    policy = AuthorisationPolicy.from_settings(settings)
    state.authorised_action = AuthorisedAction(auth_connector=auth_client, policy=policy)

    logger.info(
        "Service starting",
        extra={
            "service": settings.service.name,
            "version": settings.service.version,
            "port": settings.server.port,
            "auth_base_url": settings.auth.base_url,
            "enrolment_key": policy.enrolment_key,
        },
    )

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Service shutting down", extra={"uptime_seconds": state.uptime_seconds})
    try:
        await auth_client.close()
    except (httpx.HTTPError, OSError):
        logger.warning("Failed to close auth client during shutdown", exc_info=True)
