class LinkBudgetException(Exception):
    """
    Base exception for all link budget errors.
    """


class ParseError(LinkBudgetException, ValueError):
    """
    Raised when user-entered text cannot be turned into a value.
    """


class InvalidMagnitude(ParseError):
    """
    Raised for malformed numeric text or an unknown metric prefix.
    The input is rejected; the previous value stays in effect.
    """


class StorageException(LinkBudgetException):
    """
    Raised when a stored session record is unreadable or malformed.
    """
