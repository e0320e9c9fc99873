"""Error types raised by vault operations."""


class VaultError(Exception):
    """Base class for all vaultsage errors."""


class NotFoundError(VaultError):
    """A vault, folder or note path does not exist."""


class InvalidInputError(VaultError):
    """An argument has the wrong shape (a file instead of a folder, an empty keyword...)."""


class EmptyResultError(VaultError):
    """No markdown notes were found where at least one is required."""


class ExternalServiceError(VaultError):
    """The text-completion service failed or is not configured."""
