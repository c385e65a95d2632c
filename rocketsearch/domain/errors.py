"""Domain errors raised by the proximity search core."""


class SearchError(Exception):
    """Base class for every error the search core raises."""


class InvalidSearchRequestError(SearchError, ValueError):
    """The caller broke the request contract (bad limit, bad coordinates)."""


class StorageUnavailableError(SearchError):
    """The storage collaborator could not be queried.

    Distinguishes "search could not run" from "search found nothing".
    """
