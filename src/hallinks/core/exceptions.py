from typing import Any, Optional


class HalError(Exception):
    """Base exception for errors raised while building links.

    These deliberately do not derive from ValueError: pydantic wraps
    ValueErrors raised in validators into a ValidationError, while other
    exceptions propagate unchanged to the caller.

    Attributes:
        message: Human-readable error description
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidLinkError(HalError):
    """Raised when a link is malformed or misused as a CURIE.

    Attributes:
        rel: Relation type of the offending link (if known)
        href: Target of the offending link (if known)
    """
    def __init__(
        self,
        message: str,
        rel: Optional[str] = None,
        href: Optional[str] = None
    ):
        self.rel = rel
        self.href = href
        super().__init__(message)


class InvalidPagingParameterError(HalError):
    """Raised when a paging instance is constructed with inconsistent values.

    Attributes:
        parameter: Name of the violated parameter
        value: The rejected value
    """
    def __init__(self, parameter: str, value: Any, message: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Parameter '{parameter}' {message} (got {value!r})")
