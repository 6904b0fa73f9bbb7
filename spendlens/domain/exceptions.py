"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or invalid"""

    pass


class EmptyDatasetError(DomainException):
    """No transactions were supplied to an operation that needs at least one"""

    pass
