"""Game management layer: one session per game, persistence via a store.

Quick start::

    from chesslogic.game import GameSession
    from chesslogic.storage import JsonGameStore

    session = GameSession(JsonGameStore(path))
    session.events.on_status.append(print)
"""

from chesslogic.game.session import GameSession, SessionEvents

__all__ = ["GameSession", "SessionEvents"]
