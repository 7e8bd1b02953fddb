"""Pass-through health status endpoint for the upstream authentication service."""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, HTTPException, status
from fastapi.responses import PlainTextResponse

logger = logging.getLogger("usermgmt.actuator")


def register_actuator_routes(
    app: FastAPI,
    *,
    upstream_url: str,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Expose ``/test-actuator/health-status`` which relays the upstream health body."""

    @app.get("/test-actuator/health-status", response_class=PlainTextResponse)
    async def health_status() -> PlainTextResponse:
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                response = await client.get(upstream_url)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Health check against %s failed: %s", upstream_url, exc)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Upstream health check failed",
            ) from exc

        return PlainTextResponse(response.text)


__all__ = ["register_actuator_routes"]
