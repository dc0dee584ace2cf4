class WarehouseError(Exception):
    """Base class for every recoverable error raised by the warehouse engine."""


class InvalidOrderError(WarehouseError):
    """An order referenced an unknown item or asked for a non-positive quantity."""


class EmptyQueueError(WarehouseError):
    """There is no pending order to process."""


class PersistenceError(WarehouseError):
    """The inventory file could not be read or written."""
