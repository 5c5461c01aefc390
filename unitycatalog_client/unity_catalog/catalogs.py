"""
Unity Catalog - Catalog Operations

Client and records for listing, creating, getting, updating and deleting
catalogs.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import ResourceKind
from ._base import Payload, ResourceClient, UpdatePayload, check_name, list_of


@dataclass(frozen=True)
class CatalogInfo(Payload):
    """Catalog as returned by the server. Any field may be missing."""

    name: Optional[str] = None
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class ListCatalogsResponse(Payload):
    """One page of catalogs; pass next_page_token back unchanged to continue."""

    catalogs: List[CatalogInfo] = field(default_factory=list)
    next_page_token: Optional[str] = None

    converters = {"catalogs": list_of(CatalogInfo)}


@dataclass(frozen=True)
class CreateCatalog(Payload):
    name: str
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None

    def validate(self) -> None:
        check_name(self.name)


@dataclass(frozen=True)
class UpdateCatalog(UpdatePayload):
    """Fields to change on a catalog. `new_name` renames it."""

    new_name: Optional[str] = None
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None


class CatalogsClient(ResourceClient):
    """Catalog operations over a shared UnityCatalogClient."""

    collection = "catalogs"
    kind = ResourceKind.CATALOG
    info_type = CatalogInfo
    list_type = ListCatalogsResponse

    def list(self, page_token: Optional[str] = None, max_results: Optional[int] = None) -> ListCatalogsResponse:
        """
        List one page of catalogs.

        Args:
            page_token: next_page_token from a previous page
            max_results: Maximum number of catalogs in the page

        Returns:
            ListCatalogsResponse; next_page_token is None on the last page
        """
        return self._list({}, page_token, max_results)

    def create(self, payload: CreateCatalog) -> CatalogInfo:
        """
        Create a catalog.

        Args:
            payload: CreateCatalog with at least a name

        Returns:
            CatalogInfo of the created catalog

        Raises:
            InvalidPayloadError: If the name is empty or contains "."
            DuplicateNameError: If a catalog with this name already exists
        """
        payload.validate()
        return self._create(payload, payload.name)

    def get(self, name: str) -> CatalogInfo:
        """
        Get a catalog by name.

        Raises:
            NotFoundError: If the catalog does not exist
        """
        return super().get(name)

    def update(self, name: str, payload: UpdateCatalog) -> CatalogInfo:
        """
        Update a catalog.

        Raises:
            InvalidPayloadError: If the payload sets no field
            NotFoundError: If the catalog does not exist
        """
        return super().update(name, payload)

    def delete(self, name: str, force: bool = False) -> None:
        """
        Delete a catalog.

        Args:
            name: Catalog name
            force: Also delete the schemas and tables inside the catalog

        Raises:
            NotFoundError: If the catalog does not exist
        """
        self._delete(name, {"force": "true" if force else "false"})
