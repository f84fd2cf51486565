class ItemError(Exception):
    """Base exception for item collection misuse."""


class ItemNotFoundError(ItemError):
    """Raised when no item with the given id is in the collection."""


class ItemBusyError(ItemError):
    """Raised when an item already has an extraction in flight."""


class InvalidTransitionError(ItemError):
    """Raised when a status change is not allowed by the item state machine."""


class BatchActiveError(ItemError):
    """Raised when an action is not allowed while a batch run is active."""
