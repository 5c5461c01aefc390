"""
Unity Catalog - Table Operations

Client and records for managing tables in Unity Catalog.
Tables are addressed by their full name (catalog.schema.table format).
"""
import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional

from ..errors import InvalidPayloadError, ResourceKind
from . import _base
from ._base import Payload, ResourceClient, UpdatePayload, check_name, list_of


class TableType(str, Enum):
    MANAGED = "MANAGED"
    EXTERNAL = "EXTERNAL"


class DataSourceFormat(str, Enum):
    DELTA = "DELTA"
    CSV = "CSV"
    JSON = "JSON"
    AVRO = "AVRO"
    PARQUET = "PARQUET"
    ORC = "ORC"
    TEXT = "TEXT"


class ColumnTypeName(str, Enum):
    """Column type as sent on the wire (upper case)."""

    BOOLEAN = "BOOLEAN"
    BYTE = "BYTE"
    SHORT = "SHORT"
    INT = "INT"
    LONG = "LONG"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_NTZ = "TIMESTAMP_NTZ"
    STRING = "STRING"
    BINARY = "BINARY"
    DECIMAL = "DECIMAL"
    INTERVAL = "INTERVAL"
    ARRAY = "ARRAY"
    STRUCT = "STRUCT"
    MAP = "MAP"
    CHAR = "CHAR"
    NULL = "NULL"
    USER_DEFINED_TYPE = "USER_DEFINED_TYPE"
    TABLE_TYPE = "TABLE_TYPE"

    @property
    def type_text(self) -> str:
        """Lower-case type string used in type_text and type_json (e.g., "timestamp_ntz")."""
        return self.value.lower()


@dataclass(frozen=True)
class ColumnInfo(Payload):
    name: Optional[str] = None
    type_text: Optional[str] = None
    type_json: Optional[str] = None
    type_name: Optional[ColumnTypeName] = None
    type_precision: Optional[int] = None
    type_scale: Optional[int] = None
    type_interval_type: Optional[str] = None
    position: Optional[int] = None
    comment: Optional[str] = None
    nullable: Optional[bool] = None
    partition_index: Optional[int] = None

    converters = {"type_name": ColumnTypeName}

    @classmethod
    def of_type(
        cls,
        name: str,
        type_name: ColumnTypeName,
        position: int,
        nullable: bool = True,
        comment: Optional[str] = None,
    ) -> "ColumnInfo":
        """
        Build a column for a simple (non-decimal, non-nested) type.

        type_text and type_json are derived from type_name; precision and
        scale are set to 0.

        Example:
            ColumnInfo.of_type("my_column", ColumnTypeName.INT, position=0)
        """
        return cls(
            name=name,
            type_text=type_name.type_text,
            type_name=type_name,
            type_precision=0,
            type_scale=0,
            position=position,
            comment=comment,
            nullable=nullable,
        ).with_type_json()

    def with_type_json(self) -> "ColumnInfo":
        """
        Return a copy with type_json filled from name, type_name and nullable.

        Raises:
            InvalidPayloadError: If name, type_name or nullable is unset
        """
        missing = [f for f in ("name", "type_name", "nullable") if getattr(self, f) is None]
        if missing:
            raise InvalidPayloadError(f"Cannot build type_json, missing: {', '.join(missing)}")
        type_json = json.dumps({
            "name": self.name,
            "type": ColumnTypeName(self.type_name).type_text,
            "nullable": self.nullable,
            "metadata": {},
        })
        return replace(self, type_json=type_json)


@dataclass(frozen=True)
class TableInfo(Payload):
    name: Optional[str] = None
    catalog_name: Optional[str] = None
    schema_name: Optional[str] = None
    table_type: Optional[TableType] = None
    data_source_format: Optional[DataSourceFormat] = None
    columns: Optional[List[ColumnInfo]] = None
    storage_location: Optional[str] = None
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    table_id: Optional[str] = None

    converters = {
        "table_type": TableType,
        "data_source_format": DataSourceFormat,
        "columns": list_of(ColumnInfo),
    }

    @property
    def full_name(self) -> Optional[str]:
        if not self.catalog_name or not self.schema_name or not self.name:
            return None
        return f"{self.catalog_name}.{self.schema_name}.{self.name}"


@dataclass(frozen=True)
class ListTablesResponse(Payload):
    tables: List[TableInfo] = field(default_factory=list)
    next_page_token: Optional[str] = None

    converters = {"tables": list_of(TableInfo)}


@dataclass(frozen=True)
class CreateTable(Payload):
    """
    Table definition to create.

    EXTERNAL tables need a storage_location (e.g., "file:///tmp/my_table").
    """

    name: str
    catalog_name: str
    schema_name: str
    columns: List[ColumnInfo]
    table_type: TableType = TableType.MANAGED
    data_source_format: DataSourceFormat = DataSourceFormat.DELTA
    storage_location: Optional[str] = None
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None

    def validate(self) -> None:
        check_name(self.catalog_name, "catalog_name")
        check_name(self.schema_name, "schema_name")
        check_name(self.name)
        if self.columns is None:
            raise InvalidPayloadError("'columns' is required")
        if self.table_type is None or self.data_source_format is None:
            raise InvalidPayloadError("'table_type' and 'data_source_format' are required")
        if TableType(self.table_type) is TableType.EXTERNAL and not self.storage_location:
            raise InvalidPayloadError("storage_location is required for EXTERNAL tables")


@dataclass(frozen=True)
class UpdateTable(UpdatePayload):
    new_name: Optional[str] = None
    comment: Optional[str] = None
    properties: Optional[Dict[str, str]] = None


class TablesClient(ResourceClient):
    """Table operations over a shared UnityCatalogClient."""

    collection = "tables"
    kind = ResourceKind.TABLE
    info_type = TableInfo
    list_type = ListTablesResponse

    @staticmethod
    def full_name(catalog_name: str, schema_name: str, name: str) -> str:
        """Return "catalog_name.schema_name.name"."""
        return _base.full_name(catalog_name, schema_name, name)

    def list(
        self,
        catalog_name: str,
        schema_name: str,
        page_token: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> ListTablesResponse:
        """
        List one page of tables in a schema.

        Args:
            catalog_name: Name of the catalog
            schema_name: Name of the schema
            page_token: next_page_token from a previous page
            max_results: Maximum number of tables in the page

        Returns:
            ListTablesResponse; next_page_token is None on the last page
        """
        check_name(catalog_name, "catalog_name")
        check_name(schema_name, "schema_name")
        return self._list(
            {"catalog_name": catalog_name, "schema_name": schema_name},
            page_token,
            max_results,
        )

    def create(self, payload: CreateTable) -> TableInfo:
        """
        Create a table.

        Raises:
            InvalidPayloadError: If required fields are missing
            DuplicateNameError: If catalog.schema.table already exists
        """
        payload.validate()
        qualified = self.full_name(payload.catalog_name, payload.schema_name, payload.name)
        return self._create(payload, qualified)

    def get(self, full_name: str) -> TableInfo:
        """
        Get a table by full name (catalog.schema.table format).

        Raises:
            NotFoundError: If the table does not exist
        """
        return super().get(full_name)

    def update(self, full_name: str, payload: UpdateTable) -> TableInfo:
        """
        Update a table by full name.

        Raises:
            InvalidPayloadError: If the payload sets no field
            NotFoundError: If the table does not exist
        """
        return super().update(full_name, payload)

    def delete(self, full_name: str) -> None:
        """
        Delete a table by full name. Tables have no force flag.

        Raises:
            NotFoundError: If the table does not exist
        """
        self._delete(full_name)
