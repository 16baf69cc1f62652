"""
Exceptions and error reporting for the EXSL shader tools.

Writer and reader operations do not raise these errors for the recoverable
failures of a read/write session. They build the error, log it, record it on
the instance that detected it and return it to the caller, which is free to
continue or to ``raise`` it.
"""

from typing import Any


class EXSLError(Exception):
    """Base class for all errors reported by the EXSL tools"""

    def __init__(self, message: str, context: Any = None):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self):
        if self.context is not None:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class TypeRegistrationError(EXSLError):
    """A shading type cannot be registered (missing or duplicate canonical name)"""

    def __init__(self, message: str, type_class: type | None = None):
        super().__init__(f"Type registration error: {message}")
        self.type_class = type_class


class ILOperationError(EXSLError):
    """An EXISL-only operation was used on a document that is not IL-flavored"""

    def __init__(self, operation: str | None = None):
        message = "Cannot use an IL operation on a non-IL document"
        if operation:
            message += f" ({operation})"
        super().__init__(message)
        self.operation = operation


class BlockNestingError(EXSLError):
    """A block was closed without a matching open block"""

    def __init__(self, message: str = "Cannot close a block at spacing stage 0"):
        super().__init__(message)


__all__ = [
    "EXSLError",
    "TypeRegistrationError",
    "ILOperationError",
    "BlockNestingError",
]
