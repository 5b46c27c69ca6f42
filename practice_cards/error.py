class PracticeCardsException(Exception):
    pass


class InvalidDatasetError(PracticeCardsException):
    """Raised when a card dataset fails validation and has to be rejected as a whole."""
