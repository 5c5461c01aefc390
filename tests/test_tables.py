"""
Tests for Unity Catalog - Table operations.

Tests:
- full name composition
- column helpers (type_text, type_json)
- create payload validation
- list/create/delete requests and round trip
"""
import json

import pytest

from unitycatalog_client import (
    ColumnInfo,
    ColumnTypeName,
    CreateTable,
    DataSourceFormat,
    DuplicateNameError,
    InvalidPayloadError,
    JSONParsingError,
    NotFoundError,
    TableInfo,
    TablesClient,
    TableType,
    UpdateTable,
)

from .conftest import API, BASE_URL

TABLES_URL = f"{BASE_URL}{API}/tables"


def _columns():
    return [ColumnInfo.of_type("my_column", ColumnTypeName.INT, position=0)]


def _external_table(name: str = "mytable") -> CreateTable:
    return CreateTable(
        name=name,
        catalog_name="unity",
        schema_name="default",
        columns=_columns(),
        table_type=TableType.EXTERNAL,
        data_source_format=DataSourceFormat.DELTA,
        storage_location="file:///tmp/marksheet_uniform2",
    )


class TestFullName:
    def test_three_part_name(self):
        assert TablesClient.full_name("unity", "default", "mytable") == "unity.default.mytable"

    def test_dotted_component_is_rejected(self):
        with pytest.raises(InvalidPayloadError):
            TablesClient.full_name("unity", "default", "my.table")

    def test_table_info_full_name(self):
        info = TableInfo(name="t", catalog_name="unity", schema_name="default")
        assert info.full_name == "unity.default.t"


class TestColumnInfo:
    def test_of_type_fills_type_fields(self):
        column = ColumnInfo.of_type("my_column", ColumnTypeName.TIMESTAMP_NTZ, position=2, nullable=False)

        assert column.type_text == "timestamp_ntz"
        assert column.type_name is ColumnTypeName.TIMESTAMP_NTZ
        assert (column.type_precision, column.type_scale, column.position) == (0, 0, 2)
        assert json.loads(column.type_json) == {
            "name": "my_column",
            "type": "timestamp_ntz",
            "nullable": False,
            "metadata": {},
        }

    def test_type_json_needs_name_type_and_nullable(self):
        with pytest.raises(InvalidPayloadError, match="nullable"):
            ColumnInfo(name="c", type_name=ColumnTypeName.INT).with_type_json()

    def test_wire_format_uses_upper_case_enum(self):
        wire = _columns()[0].to_dict()

        assert wire["type_name"] == "INT"
        assert wire["type_text"] == "int"
        assert "comment" not in wire


class TestCreateTableValidation:
    def test_external_requires_storage_location(self, client, fake_adapter):
        """Should reject EXTERNAL tables without storage before any request."""
        payload = CreateTable(
            name="t",
            catalog_name="unity",
            schema_name="default",
            columns=_columns(),
            table_type=TableType.EXTERNAL,
        )

        with pytest.raises(InvalidPayloadError, match="storage_location"):
            TablesClient(client).create(payload)

        assert fake_adapter.sent == []

    @pytest.mark.parametrize("field", ["name", "catalog_name", "schema_name"])
    def test_names_are_required(self, client, fake_adapter, field: str):
        kwargs = dict(name="t", catalog_name="unity", schema_name="default", columns=_columns())
        kwargs[field] = ""

        with pytest.raises(InvalidPayloadError, match=field):
            TablesClient(client).create(CreateTable(**kwargs))

        assert fake_adapter.sent == []

    def test_columns_are_required(self):
        payload = CreateTable(name="t", catalog_name="unity", schema_name="default", columns=None)

        with pytest.raises(InvalidPayloadError, match="columns"):
            payload.validate()


class TestTableRequests:
    def test_list_requires_both_filters(self, client, fake_adapter):
        fake_adapter.reply(200, {"tables": [{"name": "t", "table_type": "MANAGED", "columns": []}]})

        result = TablesClient(client).list("unity", "default", max_results=5)

        assert fake_adapter.last_query() == {
            "catalog_name": ["unity"],
            "schema_name": ["default"],
            "max_results": ["5"],
        }
        assert result.tables[0].table_type is TableType.MANAGED
        assert result.tables[0].columns == []

    def test_create_payload_on_the_wire(self, client, fake_adapter):
        fake_adapter.reply(200, {"name": "mytable", "catalog_name": "unity", "schema_name": "default"})

        TablesClient(client).create(_external_table())

        body = fake_adapter.last_json()
        assert body["table_type"] == "EXTERNAL"
        assert body["data_source_format"] == "DELTA"
        assert body["columns"][0]["type_name"] == "INT"
        assert "properties" not in body

    def test_duplicate_carries_three_part_name(self, client, fake_adapter):
        fake_adapter.reply(409, text="Table already exists")

        with pytest.raises(DuplicateNameError) as exc_info:
            TablesClient(client).create(_external_table())

        assert exc_info.value.name == "unity.default.mytable"

    def test_decodes_columns_and_enums(self, client, fake_adapter):
        fake_adapter.reply(200, {
            "name": "mytable",
            "table_type": "EXTERNAL",
            "data_source_format": "PARQUET",
            "columns": [{"name": "c", "type_name": "STRING", "nullable": True}],
            "full_name": "unity.default.mytable",
        })

        info = TablesClient(client).get("unity.default.mytable")

        assert info.data_source_format is DataSourceFormat.PARQUET
        assert info.columns == [ColumnInfo(name="c", type_name=ColumnTypeName.STRING, nullable=True)]

    def test_unknown_enum_value_is_parsing_error(self, client, fake_adapter):
        fake_adapter.reply(200, {"name": "t", "table_type": "VIEW"})

        with pytest.raises(JSONParsingError):
            TablesClient(client).get("unity.default.t")

    def test_delete_has_no_force_flag(self, client, fake_adapter):
        fake_adapter.reply(200, text="200 OK")

        assert TablesClient(client).delete("unity.default.mytable") is None
        assert fake_adapter.last.url == f"{TABLES_URL}/unity.default.mytable"

    def test_update_not_found(self, client, fake_adapter):
        fake_adapter.reply(404, text="not found")

        with pytest.raises(NotFoundError):
            TablesClient(client).update("unity.default.t", UpdateTable(comment="x"))


def test_round_trip(server_client):
    client = TablesClient(server_client)
    catalog_name, schema_name, table_name = "unity", "default", "mytable"
    full_name = TablesClient.full_name(catalog_name, schema_name, table_name)

    initial = client.list(catalog_name, schema_name)
    info = client.create(_external_table(table_name))
    updated = client.list(catalog_name, schema_name)

    assert info.full_name == full_name
    assert info.columns[0].name == "my_column"
    assert full_name in [t.full_name for t in updated.tables]

    client.delete(full_name)

    final = client.list(catalog_name, schema_name)
    assert final == initial
    with pytest.raises(NotFoundError):
        client.delete(full_name)
