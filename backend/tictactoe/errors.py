"""Ошибки игровых команд. Отправляются клиенту сообщением error."""


class GameError(Exception):
    default_message = "Game error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyJoined(GameError):
    default_message = "You have already joined. You aren't allowed to play against yourself."


class GameFull(GameError):
    default_message = "Game is full."


class NotYourTurn(GameError):
    default_message = "It's not your turn."


class InvalidMove(GameError):
    default_message = "Your last move was invalid."


class NotPlaying(GameError):
    default_message = "You are not playing the game."


class UnknownCommand(GameError):
    default_message = "Unknown command."
