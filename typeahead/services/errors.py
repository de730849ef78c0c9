class SearchBackendError(Exception):
    """The search backend could not answer a query (transport or server failure)."""


class MalformedResponseError(SearchBackendError):
    """The search backend answered, but not in the expected shape."""
