"""Service-layer exceptions."""


class GameError(Exception):
    """Base class for conditions raised by game operations."""


class SaveLoadError(GameError):
    """Raised when a stored game record cannot be decoded."""


class NoActiveQuestError(GameError):
    """Raised when completing a quest while none is active."""


class InvalidLocationError(GameError):
    """Raised when a quest is requested for a location missing from the content table."""


class ItemNotOwnedError(GameError):
    """Raised when equipping an item the player does not own."""
