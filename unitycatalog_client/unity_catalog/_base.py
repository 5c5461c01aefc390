"""
Unity Catalog - Shared Resource Client

Payload records and the list/create/get/update/delete pattern shared by the
catalog, schema and table clients.
"""
import logging
from dataclasses import fields
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Type
from urllib.parse import quote

from ..errors import (
    InvalidPayloadError,
    JSONParsingError,
    Operation,
    RequestErrorWithResponse,
    ResourceKind,
    classify,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/2.1/unity-catalog"


def full_name(*parts: str) -> str:
    """
    Join ancestor-to-self names into a dotted full name.

    Names containing "." are rejected since "a.b" under "c" would be
    indistinguishable from "b" under schema "a" of catalog "c".

    Args:
        parts: Names from the catalog down to the resource itself

    Returns:
        Dotted full name (e.g., "unity.default.mytable")

    Raises:
        InvalidPayloadError: If a part is empty or contains "."
    """
    for part in parts:
        check_name(part)
    return ".".join(parts)


def check_name(value: Any, field_name: str = "name") -> None:
    """Reject empty names and names containing '.'."""
    if not isinstance(value, str) or not value:
        raise InvalidPayloadError(f"'{field_name}' must be a non-empty string")
    if "." in value:
        raise InvalidPayloadError(f"'{field_name}' must not contain '.': {value!r}")


def list_of(item_type: Type["Payload"]) -> Callable[[Any], List["Payload"]]:
    """Converter decoding a JSON array into a list of payload records."""
    def convert(items: Any) -> List["Payload"]:
        if not isinstance(items, list):
            raise TypeError(f"Expected a list of {item_type.__name__}, got {type(items).__name__}")
        return [item_type.from_dict(item) for item in items]
    return convert


def _to_wire(value: Any) -> Any:
    if isinstance(value, Payload):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_wire(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}
    return value


class Payload:
    """
    Mixin for dataclass records exchanged with the server.

    to_dict() leaves out unset (None) fields so a partial update never asks the
    server to clear a field. from_dict() ignores keys the record does not
    declare; `converters` maps field names to decoders for nested values.
    """

    converters: ClassVar[Dict[str, Callable[[Any], Any]]] = {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            f.name: _to_wire(getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: Any):
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known or value is None:
                continue
            converter = cls.converters.get(key)
            kwargs[key] = converter(value) if converter else value
        return cls(**kwargs)

    def validate(self) -> None:
        """Raise InvalidPayloadError if required fields are missing."""


class UpdatePayload(Payload):
    """Partial update; at least one field must be set."""

    def validate(self) -> None:
        if not self.to_dict():
            names = ", ".join(f.name for f in fields(self))
            raise InvalidPayloadError(f"At least one field ({names}) must be provided")
        new_name = getattr(self, "new_name", None)
        if new_name is not None:
            check_name(new_name, "new_name")


class ResourceClient:
    """
    Base for the per-resource clients.

    Subclasses set the collection path segment, the resource kind and the
    record types used to decode responses. Every request goes through
    _send(), which remaps 404/409 statuses via errors.classify().
    """

    collection: ClassVar[str]
    kind: ClassVar[ResourceKind]
    info_type: ClassVar[Type[Payload]]
    list_type: ClassVar[Type[Payload]]

    def __init__(self, client):
        """
        Args:
            client: UnityCatalogClient (or any object with url() and request())
        """
        self._client = client

    def _collection_url(self) -> str:
        return self._client.url(f"{API_PREFIX}/{self.collection}")

    def _resource_url(self, identifier: str) -> str:
        if not isinstance(identifier, str) or not identifier:
            raise InvalidPayloadError(f"A {self.kind.value} identifier is required")
        return f"{self._collection_url()}/{quote(identifier, safe='')}"

    def _send(
        self,
        operation: Operation,
        identifier: str,
        method: str,
        url: str,
        body: Optional[Payload] = None,
        params: Optional[Dict[str, Any]] = None,
        response_type: Optional[Type[Payload]] = None,
    ):
        try:
            return self._client.request(method, url, body=body, params=params, response_type=response_type)
        except RequestErrorWithResponse as e:
            mapped = classify(e.status_code, operation, self.kind, identifier)
            if mapped is None:
                raise
            logger.debug(f"{operation.value} {self.kind.value} '{identifier}': {e.status_code} -> {type(mapped).__name__}")
            raise mapped from e

    def _list(
        self,
        filters: Dict[str, str],
        page_token: Optional[str],
        max_results: Optional[int],
    ):
        params: Dict[str, Any] = dict(filters)
        if page_token is not None:
            params["page_token"] = page_token
        if max_results is not None:
            params["max_results"] = max_results
        return self._send(
            Operation.LIST, self.collection, "GET", self._collection_url(),
            params=params, response_type=self.list_type,
        )

    def _create(self, payload: Payload, qualified_name: str):
        return self._send(
            Operation.CREATE, qualified_name, "POST", self._collection_url(),
            body=payload, response_type=self.info_type,
        )

    def get(self, identifier: str):
        """
        Get one resource.

        Raises:
            NotFoundError: If the server answers 404
        """
        return self._send(
            Operation.GET, identifier, "GET", self._resource_url(identifier),
            response_type=self.info_type,
        )

    def update(self, identifier: str, payload: UpdatePayload):
        """
        Apply a partial update; only populated payload fields are sent.

        Raises:
            InvalidPayloadError: If the payload sets no field
            NotFoundError: If the server answers 404
        """
        url = self._resource_url(identifier)
        payload.validate()
        return self._send(
            Operation.UPDATE, identifier, "PATCH", url,
            body=payload, response_type=self.info_type,
        )

    def _delete(self, identifier: str, params: Optional[Dict[str, Any]] = None) -> None:
        url = self._resource_url(identifier)
        try:
            self._send(Operation.DELETE, identifier, "DELETE", url, params=params)
        except JSONParsingError:
            # DELETE answers 200 with a body that is not JSON
            logger.debug(f"Deleted {self.kind.value} '{identifier}' (non-JSON body)")
        return None
