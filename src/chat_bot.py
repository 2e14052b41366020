"""
chat front end: turns chat messages into game commands

the bot does not know how messages travel. it talks to a transport object
with two methods:

    send(chat_id, text, markdown=False, keyboard=None) -> message id
    delete(chat_id, message_id)

ConsoleTransport plays that role for local games in a terminal.
"""
import logging
import os
import sys
from collections import namedtuple

from engine import Direction
from game import GameOver
from session import SessionRegistry


logger = logging.getLogger(__name__)

IncomingMessage = namedtuple("IncomingMessage", ["user_id", "chat_id", "message_id", "text"])

LEFT_BUTTON = "⬅️"
UP_BUTTON = "⬆️"
RIGHT_BUTTON = "➡️"
DOWN_BUTTON = "⬇️"

KEYBOARD = [
    [LEFT_BUTTON, UP_BUTTON, RIGHT_BUTTON],
    [" ", DOWN_BUTTON, " "],
]

GREETING = """**tg2048**
2048 clone chat bot

Press any button to start

/stop - stop the game and reset the best score
/restart - restart the current game"""

# buttons arrive with or without variation selectors depending on the client
_INPUT_TO_DIRECTION = {
    "⬅": Direction.LEFT,
    "⬆": Direction.UP,
    "➡": Direction.RIGHT,
    "⬇": Direction.DOWN,
    "left": Direction.LEFT,
    "up": Direction.UP,
    "right": Direction.RIGHT,
    "down": Direction.DOWN,
}

COMMANDS = ("restart", "stop")


def _normalize(text):
    return text.replace("\ufe0f", "").strip().lower()


def parse_direction(text):
    """direction for a button or word, None for anything else"""
    if not text:
        return None
    return _INPUT_TO_DIRECTION.get(_normalize(text))


def parse_command(text):
    """'restart' or 'stop' for /restart and /stop (with or without @botname)"""
    if not text or not text.startswith("/"):
        return None
    parts = text[1:].split()
    if not parts:
        return None
    name = parts[0].split("@", 1)[0].lower()
    return name if name in COMMANDS else None


def format_field(session):
    """score line and the grid as a monospaced markdown block"""
    header, _, table = session.render().partition("\n")
    return f"{header}\n```\n{table}```\n"


class ChatBot:
    def __init__(self, transport, sessions=None):
        self.transport = transport
        self.sessions = sessions if sessions is not None else SessionRegistry()

    def _send_field(self, session, chat_id):
        session.last_message_id = self.transport.send(chat_id, format_field(session), markdown=True)

    def handle(self, message):
        """
        process one message from a player

        the first message of a session only greets and shows the board.
        after that the previous board message and the player's own
        message are deleted, commands are applied, and a direction
        makes a move.

        returns:
            the Moved or GameOver result when a move was made, else None
        """
        chat_id = message.chat_id
        session = self.sessions.get_or_create(message.user_id)
        logger.debug("current session: %r", session)

        if not session.greeted:
            self.transport.send(chat_id, GREETING, markdown=True, keyboard=KEYBOARD)
            self._send_field(session, chat_id)
            session.greeted = True
            return None

        if session.last_message_id is not None:
            self.transport.delete(chat_id, session.last_message_id)
            session.last_message_id = None

        command = parse_command(message.text)
        if command == "stop":
            self.sessions.remove(message.user_id)
        elif command == "restart":
            self.sessions.restart(message.user_id)

        self.transport.delete(chat_id, message.message_id)

        direction = parse_direction(message.text)
        if direction is None:
            return None

        result = session.game.apply_direction(direction)
        if isinstance(result, GameOver):
            self.transport.send(chat_id, str(result))
            self.sessions.restart(message.user_id)
            return result

        self._send_field(session, chat_id)
        return result


class ConsoleTransport:
    """prints outgoing messages to a stream, deletions are no-ops"""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout
        self.next_id = 1

    def send(self, chat_id, text, markdown=False, keyboard=None):
        message_id = self.next_id
        self.next_id += 1
        print(text.replace("```\n", ""), file=self.stream)
        if keyboard:
            for row in keyboard:
                print("  ".join(button.strip() or "." for button in row), file=self.stream)
        return message_id

    def delete(self, chat_id, message_id):
        logger.debug("message %s deleted from chat %s", message_id, chat_id)


def main():
    logging.basicConfig(level=os.environ.get("TG2048_LOG_LEVEL", "INFO").upper())

    bot = ChatBot(ConsoleTransport())
    print("2048 chat bot (console)")
    print("Type left, up, right, down or use the arrow buttons; /restart, /stop; Ctrl+D to quit")
    print()

    for message_id, line in enumerate(sys.stdin, start=1):
        bot.handle(IncomingMessage("console", 0, message_id, line.strip()))


if __name__ == "__main__":
    main()
