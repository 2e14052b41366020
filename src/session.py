"""
per-user game records for front ends serving several players
"""
import logging

from game import Game2048


logger = logging.getLogger(__name__)


class Session:
    """one player's current game plus what the front end remembers about them"""

    def __init__(self, user_id, game, best_score=0):
        self.user_id = user_id
        self.game = game
        self.best_score = best_score
        self.greeted = False
        self.last_message_id = None

    def record_best(self):
        self.best_score = max(self.best_score, self.game.score)
        return self.best_score

    def restart(self, game):
        """keep the best score, swap in a fresh game and forget what was shown"""
        self.record_best()
        self.game = game
        self.greeted = False
        self.last_message_id = None

    def render(self):
        return self.game.render(self.best_score)

    def __repr__(self):
        return (f"Session(user_id={self.user_id!r}, score={self.game.score}, "
                f"best_score={self.best_score}, greeted={self.greeted})")


class SessionRegistry:
    """
    sessions keyed by user id

    args:
        game_factory: callable returning a new game, Game2048 by default
    """

    def __init__(self, game_factory=Game2048):
        self.game_factory = game_factory
        self._sessions = {}

    def get(self, user_id):
        return self._sessions.get(user_id)

    def get_or_create(self, user_id):
        session = self._sessions.get(user_id)
        if session is None:
            session = Session(user_id, self.game_factory())
            self._sessions[user_id] = session
            logger.info("new session for user %s", user_id)
        return session

    def restart(self, user_id):
        session = self._sessions[user_id]
        session.restart(self.game_factory())
        logger.info("session for user %s restarted, best score %d", user_id, session.best_score)
        return session

    def remove(self, user_id):
        session = self._sessions.pop(user_id, None)
        if session is not None:
            logger.info("session for user %s removed", user_id)
        return session

    def __contains__(self, user_id):
        return user_id in self._sessions

    def __len__(self):
        return len(self._sessions)

    def __iter__(self):
        return iter(list(self._sessions.values()))
