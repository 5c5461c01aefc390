"""
Unity Catalog Client - Errors

Exception hierarchy for the REST client and the status-code classifier
that turns HTTP failures into resource-specific errors.
"""
from enum import Enum
from typing import Optional


class ResourceKind(str, Enum):
    """Kind of Unity Catalog resource an operation targets."""

    CATALOG = "catalog"
    SCHEMA = "schema"
    TABLE = "table"


class Operation(str, Enum):
    """Resource-client operation, used to decide how a status is remapped."""

    LIST = "list"
    CREATE = "create"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"


class UnityCatalogError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class MalformedURLError(UnityCatalogError, ValueError):
    """Raised when the base URL (or a URL built from it) is not usable."""


class ClientBuildError(UnityCatalogError):
    """Raised when the underlying HTTP session cannot be built."""


class ConfigurationError(ClientBuildError):
    """Raised when connection settings cannot be resolved."""


class InvalidPayloadError(UnityCatalogError, ValueError):
    """Raised when a request payload is missing required fields."""


class RequestFormattingError(UnityCatalogError):
    """Raised when a request body cannot be serialized to JSON."""


class RequestError(UnityCatalogError):
    """Raised on network or transport failures (refused, timeout, TLS)."""


class RequestErrorWithResponse(UnityCatalogError):
    """Raised when the server answers with a non-2xx status.

    The raw body is kept as text because error payloads are not guaranteed
    to be JSON.
    """

    def __init__(self, status_code: int, body: str, method: str = "", url: str = ""):
        super().__init__(f"{method} {url} failed with status {status_code}: {body}".strip())
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url


class JSONParsingError(UnityCatalogError):
    """Raised when a successful response body cannot be decoded."""


class DuplicateNameError(UnityCatalogError):
    """Raised when creating a resource whose name already exists."""

    def __init__(self, kind: ResourceKind, name: str):
        super().__init__(f"Duplicate {kind.value} name: {name}")
        self.kind = kind
        self.name = name


class NotFoundError(UnityCatalogError):
    """Raised when the target resource does not exist."""

    def __init__(self, kind: ResourceKind, identifier: str):
        super().__init__(f"{kind.value.capitalize()} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


_NOT_FOUND_OPERATIONS = (Operation.GET, Operation.UPDATE, Operation.DELETE)


def classify(
    status_code: int,
    operation: Operation,
    kind: ResourceKind,
    identifier: str,
) -> Optional[UnityCatalogError]:
    """
    Map an HTTP status to a resource-specific error.

    Args:
        status_code: HTTP status returned by the server
        operation: Resource-client operation that produced the status
        kind: Resource kind targeted by the operation
        identifier: Name or full name of the targeted resource

    Returns:
        DuplicateNameError for 409 on create, NotFoundError for 404 on
        get/update/delete, or None when the generic error should propagate
    """
    if status_code == 409 and operation is Operation.CREATE:
        return DuplicateNameError(kind, identifier)
    if status_code == 404 and operation in _NOT_FOUND_OPERATIONS:
        return NotFoundError(kind, identifier)
    return None
