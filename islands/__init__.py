"""
Islands - Two-player island placement and guessing game engine.

The engine runs one game session per actor and provides:
- Grid geometry (coordinates, islands, boards)
- A rules state machine gating every player action
- A session actor that serializes all changes to a game
- A name registry and session manager for running games
"""

__version__ = "0.1.0"
