class BaseApiClientError(Exception):
    """Base class for errors of all clients of external services."""
