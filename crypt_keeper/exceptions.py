"""
Crypt Keeper Exceptions
=======================
Error taxonomy shared by every operation.

Messages name the offending argument, never its value.
"""

from typing import Optional


class CryptKeeperError(Exception):
    """Base exception for all crypt_keeper errors."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.message = message
        self.operation = operation
        super().__init__(message)


class InvalidArgument(CryptKeeperError, ValueError):
    """Raised when a required argument is missing or unusable."""

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message, operation=operation)
        self.argument = argument


class PrimitiveFailure(CryptKeeperError):
    """Raised when the underlying cryptographic library reports an error."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message, operation=operation)
        self.cause = cause


class MalformedHash(CryptKeeperError, ValueError):
    """Raised when an encoded hash cannot be parsed by the verifying strategy."""
    pass
