"""
Unity Catalog - Schema Operations

Client and records for managing schemas (databases) in Unity Catalog.
Schemas are addressed by their full name (catalog.schema format).
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import ResourceKind
from . import _base
from ._base import Payload, ResourceClient, UpdatePayload, check_name, list_of


@dataclass(frozen=True)
class SchemaInfo(Payload):
    name: Optional[str] = None
    catalog_name: Optional[str] = None
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    schema_id: Optional[str] = None

    @property
    def full_name(self) -> Optional[str]:
        if not self.catalog_name or not self.name:
            return None
        return f"{self.catalog_name}.{self.name}"


@dataclass(frozen=True)
class ListSchemasResponse(Payload):
    schemas: List[SchemaInfo] = field(default_factory=list)
    next_page_token: Optional[str] = None

    converters = {"schemas": list_of(SchemaInfo)}


@dataclass(frozen=True)
class CreateSchema(Payload):
    name: str
    catalog_name: str
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None

    def validate(self) -> None:
        check_name(self.catalog_name, "catalog_name")
        check_name(self.name)


@dataclass(frozen=True)
class UpdateSchema(UpdatePayload):
    new_name: Optional[str] = None
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None


class SchemasClient(ResourceClient):
    """Schema operations over a shared UnityCatalogClient."""

    collection = "schemas"
    kind = ResourceKind.SCHEMA
    info_type = SchemaInfo
    list_type = ListSchemasResponse

    @staticmethod
    def full_name(catalog_name: str, name: str) -> str:
        """Return "catalog_name.name"."""
        return _base.full_name(catalog_name, name)

    def list(
        self,
        catalog_name: str,
        page_token: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> ListSchemasResponse:
        """
        List one page of schemas in a catalog.

        Args:
            catalog_name: Name of the catalog
            page_token: next_page_token from a previous page
            max_results: Maximum number of schemas in the page

        Returns:
            ListSchemasResponse; next_page_token is None on the last page
        """
        check_name(catalog_name, "catalog_name")
        return self._list({"catalog_name": catalog_name}, page_token, max_results)

    def create(self, payload: CreateSchema) -> SchemaInfo:
        """
        Create a schema.

        Raises:
            InvalidPayloadError: If name or catalog_name is empty or contains "."
            DuplicateNameError: If catalog_name.name already exists
        """
        payload.validate()
        return self._create(payload, self.full_name(payload.catalog_name, payload.name))

    def get(self, full_name: str) -> SchemaInfo:
        """
        Get a schema by full name (catalog.schema format).

        Raises:
            NotFoundError: If the schema does not exist
        """
        return super().get(full_name)

    def update(self, full_name: str, payload: UpdateSchema) -> SchemaInfo:
        """
        Update a schema by full name.

        Raises:
            InvalidPayloadError: If the payload sets no field
            NotFoundError: If the schema does not exist
        """
        return super().update(full_name, payload)

    def delete(self, full_name: str, force: bool = False) -> None:
        """
        Delete a schema by full name.

        Args:
            full_name: Full schema name (catalog.schema format)
            force: Also delete the tables inside the schema

        Raises:
            NotFoundError: If the schema does not exist
        """
        self._delete(full_name, {"force": "true" if force else "false"})
