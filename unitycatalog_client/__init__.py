"""
Unity Catalog REST Client

Typed client for the Unity Catalog catalogs, schemas and tables APIs.

Usage:
    from unitycatalog_client import UnityCatalogClient, CatalogsClient, CreateCatalog

    with UnityCatalogClient("http://localhost:8080") as client:
        catalogs = CatalogsClient(client)
        catalogs.create(CreateCatalog(name="mycatalog"))
        catalogs.get("mycatalog")
        catalogs.delete("mycatalog", force=False)
"""

__version__ = "0.1.0"

from .client import UnityCatalogClient
from .config import ConnectionSettings, resolve_settings
from .errors import (
    ClientBuildError,
    ConfigurationError,
    DuplicateNameError,
    InvalidPayloadError,
    JSONParsingError,
    MalformedURLError,
    NotFoundError,
    Operation,
    RequestError,
    RequestErrorWithResponse,
    RequestFormattingError,
    ResourceKind,
    UnityCatalogError,
    classify,
)
from .unity_catalog import (
    CatalogInfo,
    CatalogsClient,
    ColumnInfo,
    ColumnTypeName,
    CreateCatalog,
    CreateSchema,
    CreateTable,
    DataSourceFormat,
    ListCatalogsResponse,
    ListSchemasResponse,
    ListTablesResponse,
    SchemaInfo,
    SchemasClient,
    TableInfo,
    TablesClient,
    TableType,
    UpdateCatalog,
    UpdateSchema,
    UpdateTable,
    full_name,
)

__all__ = [
    "UnityCatalogClient",
    "ConnectionSettings",
    "resolve_settings",
    "ClientBuildError",
    "ConfigurationError",
    "DuplicateNameError",
    "InvalidPayloadError",
    "JSONParsingError",
    "MalformedURLError",
    "NotFoundError",
    "Operation",
    "RequestError",
    "RequestErrorWithResponse",
    "RequestFormattingError",
    "ResourceKind",
    "UnityCatalogError",
    "classify",
    "CatalogInfo",
    "CatalogsClient",
    "ColumnInfo",
    "ColumnTypeName",
    "CreateCatalog",
    "CreateSchema",
    "CreateTable",
    "DataSourceFormat",
    "ListCatalogsResponse",
    "ListSchemasResponse",
    "ListTablesResponse",
    "SchemaInfo",
    "SchemasClient",
    "TableInfo",
    "TablesClient",
    "TableType",
    "UpdateCatalog",
    "UpdateSchema",
    "UpdateTable",
    "full_name",
]
