"""
Unity Catalog - Resource Clients

Clients for catalogs, schemas and tables, sharing one UnityCatalogClient.
"""

from ._base import API_PREFIX, full_name

from .catalogs import (
    CatalogInfo,
    CatalogsClient,
    CreateCatalog,
    ListCatalogsResponse,
    UpdateCatalog,
)

from .schemas import (
    CreateSchema,
    ListSchemasResponse,
    SchemaInfo,
    SchemasClient,
    UpdateSchema,
)

from .tables import (
    ColumnInfo,
    ColumnTypeName,
    CreateTable,
    DataSourceFormat,
    ListTablesResponse,
    TableInfo,
    TablesClient,
    TableType,
    UpdateTable,
)

__all__ = [
    "API_PREFIX",
    "full_name",
    "CatalogInfo",
    "CatalogsClient",
    "CreateCatalog",
    "ListCatalogsResponse",
    "UpdateCatalog",
    "CreateSchema",
    "ListSchemasResponse",
    "SchemaInfo",
    "SchemasClient",
    "UpdateSchema",
    "ColumnInfo",
    "ColumnTypeName",
    "CreateTable",
    "DataSourceFormat",
    "ListTablesResponse",
    "TableInfo",
    "TablesClient",
    "TableType",
    "UpdateTable",
]
