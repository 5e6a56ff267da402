import random
from typing import Any

import pytest

from tictactoe.board import Board
from tictactoe.constants import CellState
from tictactoe.display import BoardDisplay
from tictactoe.session import SessionCoordinator


class FakeMailbox:
    def __init__(self, *channels: str):
        self._channels = list(channels)
        self.sent: list[tuple[str, dict[str, Any]]] = []

    def open(self, channel: str) -> None:
        self._channels.append(channel)

    def close(self, channel: str) -> None:
        self._channels.remove(channel)

    def send(self, channel: str, payload: dict[str, Any]) -> None:
        self.sent.append((channel, payload))

    def channels(self) -> list[str]:
        return list(self._channels)

    def events(self, channel: str, event: str | None = None) -> list[dict[str, Any]]:
        return [p for ch, p in self.sent if ch == channel and (event is None or p["event"] == event)]

    def clear(self) -> None:
        self.sent.clear()


class FixedRandom(random.Random):
    """random() всегда возвращает заданное значение, при 0.0 первый игрок получает X."""

    def __init__(self, value: float):
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


def board_from(rows: str) -> Board:
    """Доска из строки вида "XO. / .X. / ..O"."""
    board = Board()
    for r, line in enumerate(rows.split("/")):
        for c, ch in enumerate(line.strip()):
            if ch == "X":
                assert board.place_cross(r, c)
            elif ch == "O":
                assert board.place_naught(r, c)
    return board


@pytest.fixture
def mailbox():
    return FakeMailbox("alice", "bob")


@pytest.fixture
def display():
    return BoardDisplay()


@pytest.fixture
def coordinator(mailbox, display):
    # alice занимает первое место и получает X
    return SessionCoordinator(Board(), mailbox, display, rng=FixedRandom(0.0))


@pytest.fixture
def started(coordinator, mailbox):
    coordinator.handle_message("alice", {"command": "join", "name": "Alice"})
    coordinator.handle_message("bob", {"command": "join", "name": "Bob"})
    mailbox.clear()
    return coordinator


def play(coordinator, moves):
    """Поочерёдные ходы alice (X) и bob (O)."""
    for i, (row, col) in enumerate(moves):
        channel = "alice" if i % 2 == 0 else "bob"
        coordinator.handle_message(channel, {"command": "move", "row": row, "column": col})


EMPTY_LAYOUT = [int(CellState.EMPTY)] * 9
