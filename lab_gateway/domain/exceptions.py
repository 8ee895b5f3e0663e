"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class TransactionAPIError(DomainException):
    """Transaction store returned an error, is unavailable, or sent malformed records"""

    pass


class AuthServiceError(DomainException):
    """Authentication service is unavailable or answered with garbage"""

    pass


class AuthenticationError(DomainException):
    """Credentials were rejected by the authentication service"""

    pass


class InvalidFilterError(DomainException):
    """Transaction filter parameters are inconsistent"""

    pass


class SessionNotFoundError(DomainException):
    """No open session matches the presented token"""

    pass


class SessionExpiredError(DomainException):
    """Session existed but is past its expiry"""

    pass
