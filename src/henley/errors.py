class HenleyError(Exception):
    """Base class for Henley ingestion failures."""


class HenleyDownloadError(HenleyError):
    pass


class HenleyParseError(HenleyError):
    pass


class EmptyHenleyDatasetError(HenleyError):
    """No origin produced any entry and empty output was not allowed."""
