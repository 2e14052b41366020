import io
import logging

import pytest

from chat_bot import (
    GREETING,
    KEYBOARD,
    ChatBot,
    ConsoleTransport,
    IncomingMessage,
    format_field,
    parse_command,
    parse_direction,
)
from engine import Direction
from game import GameOver, Moved
from grid import Grid


class RecordingTransport:
    def __init__(self):
        self.sent = []
        self.deleted = []

    def send(self, chat_id, text, markdown=False, keyboard=None):
        self.sent.append((chat_id, text, markdown, keyboard))
        return len(self.sent) + 100

    def delete(self, chat_id, message_id):
        self.deleted.append((chat_id, message_id))


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def bot(transport):
    return ChatBot(transport)


def message(text, message_id=1, user_id=5):
    return IncomingMessage(user_id, 77, message_id, text)


@pytest.mark.parametrize("text, expected", [
    ("⬅️", Direction.LEFT),
    ("⬅", Direction.LEFT),
    ("️⬆️", Direction.UP),
    ("➡️️️", Direction.RIGHT),
    ("⬇️", Direction.DOWN),
    (" Down ", Direction.DOWN),
    (" ", None),
    ("hello", None),
    ("", None),
    (None, None),
])
def test_parse_direction(text, expected):
    assert parse_direction(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("/restart", "restart"),
    ("/stop", "stop"),
    ("/stop@tg2048_bot", "stop"),
    ("/help", None),
    ("/", None),
    ("stop", None),
])
def test_parse_command(text, expected):
    assert parse_command(text) == expected


def test_first_message_greets_and_shows_field(bot, transport):
    result = bot.handle(message("hi"))

    assert result is None
    assert transport.sent[0] == (77, GREETING, True, KEYBOARD)
    _, field_text, markdown, _ = transport.sent[1]
    assert markdown
    assert field_text.startswith("Score: 0 Best: 0\n```\n")
    assert field_text.endswith("```\n")

    session = bot.sessions.get(5)
    assert session.greeted
    assert session.last_message_id == 102
    assert transport.deleted == []


def test_direction_moves_and_replaces_field(bot, transport):
    bot.handle(message("hi", message_id=1))

    result = bot.handle(message("⬅️", message_id=2))

    assert isinstance(result, Moved)
    assert transport.deleted == [(77, 102), (77, 2)]
    assert transport.sent[-1][1] == format_field(bot.sessions.get(5))
    assert bot.sessions.get(5).last_message_id == len(transport.sent) + 100


def test_unknown_text_is_deleted_and_ignored(bot, transport):
    bot.handle(message("hi", message_id=1))

    assert bot.handle(message("what?", message_id=2)) is None
    assert transport.deleted == [(77, 102), (77, 2)]
    assert len(transport.sent) == 2


def test_stop_removes_session(bot, transport):
    bot.handle(message("hi"))

    bot.handle(message("/stop", message_id=2))

    assert 5 not in bot.sessions


def test_restart_starts_over_and_greets_again(bot, transport):
    bot.handle(message("hi"))
    session = bot.sessions.get(5)
    session.game.score = 48

    bot.handle(message("/restart", message_id=2))

    assert session.best_score == 48
    assert session.game.score == 0
    assert not session.greeted

    bot.handle(message("⬆️", message_id=3))
    assert transport.sent[-2][1] == GREETING


def test_game_over_reports_score_and_restarts(bot, transport, blocked_rows):
    bot.handle(message("hi"))
    session = bot.sessions.get(5)
    session.game.grid = Grid.from_rows(blocked_rows)
    session.game.score = 200

    result = bot.handle(message("➡️", message_id=2))

    assert result == GameOver(200)
    assert transport.sent[-1][1] == "Game over. Your score is 200"
    assert session.best_score == 200
    assert session.game.score == 0
    assert not session.game.game_over


def test_users_have_separate_games(bot):
    bot.handle(message("hi", user_id=1))
    bot.handle(message("hi", user_id=2))

    assert len(bot.sessions) == 2
    assert bot.sessions.get(1).game is not bot.sessions.get(2).game


def test_console_transport_numbers_messages():
    stream = io.StringIO()
    transport = ConsoleTransport(stream)

    first = transport.send(0, "Score: 0\n```\n[    ]\n```\n", markdown=True)
    second = transport.send(0, GREETING, keyboard=KEYBOARD)
    transport.delete(0, first)

    assert (first, second) == (1, 2)
    output = stream.getvalue()
    assert "```" not in output
    assert "⬅️  ⬆️  ➡️" in output


def test_spawn_is_logged_once_per_move(bot, caplog):
    bot.handle(message("hi", message_id=1))

    with caplog.at_level(logging.INFO):
        result = bot.handle(message("⬇️", message_id=2))

    assert isinstance(result, Moved)
    spawn_lines = [r for r in caplog.records if "spawned" in r.getMessage() or "generated" in r.getMessage()]
    assert len(spawn_lines) == 1
    assert spawn_lines[0].name == "spawner"
