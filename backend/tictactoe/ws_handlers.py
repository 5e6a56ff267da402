"""
Обработка сообщений WebSocket: разбор JSON и передача команды координатору.
Закрытие канала обрабатывается как leave.
"""
import json
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from .session import SessionCoordinator
from .ws_manager import WSManager

logger = logging.getLogger(__name__)


def handle_ws_message(coordinator: SessionCoordinator, raw: str, channel: str) -> None:
    """
    Обрабатывает одно сообщение от клиента.
    Некорректный JSON и не-объекты логируются и отбрасываются.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("WS: invalid JSON from %s: %s", channel, e)
        return
    if not isinstance(data, dict):
        logger.warning("WS: expected object from %s, got %s", channel, type(data).__name__)
        return
    logger.info("WS: msg from %s command=%s", channel, data.get("command"))
    coordinator.handle_message(channel, data)


async def ws_channel_loop(ws: WebSocket, manager: WSManager, coordinator: SessionCoordinator) -> None:
    channel = None
    try:
        await ws.accept()
        channel = manager.connect(ws).channel
        logger.info("WS: accepted channel=%s", channel)
        coordinator.channel_opened(channel)
        while True:
            msg = await ws.receive_text()
            handle_ws_message(coordinator, msg, channel)
    except WebSocketDisconnect as e:
        logger.info("WS: client disconnected code=%s reason=%s channel=%s", e.code, e.reason or "", channel)
    except Exception as e:
        logger.exception("WS: error channel=%s: %s", channel, e)
    finally:
        if channel:
            manager.disconnect(channel)
            coordinator.channel_closed(channel)
            logger.info("WS: disconnected channel=%s", channel)
