"""systems package – Snake game rules and the AI status panel.

Only the headless GameSession is exported here; the pygame panel is
imported from systems.ai_debug_overlay directly.
"""

from .game_session import GameSession
