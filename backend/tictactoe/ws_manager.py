"""
Менеджер WebSocket: подключения по channel id и доставка сообщений.
Отправка не блокирует: сообщение кладётся в очередь соединения,
отдельная задача отправляет его клиенту.
"""
import asyncio
import logging
import uuid
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class Connection:
    def __init__(self, ws: WebSocket, channel: str):
        self.ws = ws
        self.channel = channel
        self.outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.writer: asyncio.Task | None = None

    async def _write_loop(self) -> None:
        while True:
            payload = await self.outbox.get()
            try:
                await self.ws.send_json(payload)
            except Exception as e:
                logger.warning("send to %s failed: %s", self.channel, e)
                return


class WSManager:
    def __init__(self):
        self._by_channel: dict[str, Connection] = {}

    def connect(self, ws: WebSocket) -> Connection:
        conn = Connection(ws, str(uuid.uuid4()))
        conn.writer = asyncio.create_task(conn._write_loop())
        self._by_channel[conn.channel] = conn
        return conn

    def disconnect(self, channel: str) -> None:
        conn = self._by_channel.pop(channel, None)
        if conn and conn.writer:
            conn.writer.cancel()

    def channels(self) -> list[str]:
        return list(self._by_channel)

    def count(self) -> int:
        return len(self._by_channel)

    def send(self, channel: str, payload: dict[str, Any]) -> None:
        conn = self._by_channel.get(channel)
        if not conn:
            logger.warning("send: unknown channel %s, dropping %s", channel, payload.get("event"))
            return
        if conn.writer is not None and conn.writer.done():
            logger.debug("send: writer for %s stopped, dropping %s", channel, payload.get("event"))
            return
        conn.outbox.put_nowait(payload)
