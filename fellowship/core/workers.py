# File: fellowship/core/workers.py
from uvicorn.workers import UvicornWorker

from fellowship.core.config import settings


class FellowshipWorker(UvicornWorker):
    """Uvicorn worker for gunicorn with the realtime heartbeat enabled."""

    CONFIG_KWARGS = {
        **UvicornWorker.CONFIG_KWARGS,
        "ws_ping_interval": settings.WEBSOCKET_HEARTBEAT_INTERVAL,
        "ws_ping_timeout": settings.WEBSOCKET_HEARTBEAT_INTERVAL,
    }
