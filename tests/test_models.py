from openapi_entities.parser.base import (
    ColumnDef,
    DocumentInfo,
    DocumentMeta,
    Table,
    Type,
    TypeDef,
    wrap_array,
    wrap_optional,
)


class TestTypeWrapping:
    def test_optional_then_array(self):
        element = wrap_optional("int64", False)
        assert element == "*int64"
        assert wrap_array(element, True) == "[]*int64"

    def test_required_scalar_untouched(self):
        assert wrap_array(wrap_optional("string", True), False) == "string"


class TestColumnDef:
    def test_create_required_scalar(self):
        col = ColumnDef.create(raw_key="user_id", type_=Type(base="string"), not_null=True)
        assert col.name == "UserID"
        assert col.var_name == "userID"
        assert col.plural_name == "UserIDs"
        assert col.db_name == "user_id"
        assert col.db_plural_name == "user_ids"
        assert col.json_name == "userId"
        assert col.key == "userId"
        assert col.go_type == "string"
        assert col.base_type == "string"
        assert col.is_array is False

    def test_create_optional_array(self):
        col = ColumnDef.create(raw_key="scores", type_=Type(base="int64", array=True), not_null=False)
        assert col.base_type == "*int64"
        assert col.go_type == "[]*int64"
        assert col.is_array is True

    def test_naming_is_pure(self):
        a = ColumnDef.create(raw_key="owner_name", type_=Type(base="string"), not_null=False)
        b = ColumnDef.create(raw_key="owner_name", type_=Type(base="string"), not_null=False)
        assert a == b

    def test_dump_omits_empty_fields(self):
        col = ColumnDef.create(raw_key="tag", type_=Type(base="string"), not_null=False)
        data = col.model_dump(by_alias=True, exclude_defaults=True)
        assert data["Type"] == "*string"
        assert data["nameExact"] == "tag"
        assert data["notNull"] is False
        assert data["isArray"] is False
        for omitted in ("format", "size", "default", "comment", "in", "type"):
            assert omitted not in data

    def test_dump_parameter_location(self):
        col = ColumnDef.create(
            raw_key="limit",
            type_=Type(base="int64", format="int32"),
            not_null=False,
            location="query",
        )
        data = col.model_dump(by_alias=True, exclude_defaults=True)
        assert data["in"] == "query"
        assert data["format"] == "int32"


class TestTypeDef:
    def test_always_not_null(self):
        td = TypeDef.create(Type(base="Pet", array=True), comment="A list")
        assert td.not_null is True
        assert td.base_type == "Pet"
        assert td.go_type == "[]Pet"


class TestTable:
    def test_create_schema_table(self):
        table = Table.create(raw_name="user_profile", kind="schema", columns=[])
        assert table.key == "UserProfile"
        assert table.name == "UserProfile"
        assert table.var_name == "userProfile"
        assert table.plural_name == "UserProfiles"
        assert table.plural_var_name == "userProfiles"
        assert table.db_name == "user_profile"
        assert table.db_plural_name == "user_profiles"
        assert table.short_name == "up"

    def test_dump_schema_table(self):
        data = Table.create(raw_name="Pet", kind="schema", columns=[]).dump()
        assert data["fields"] == []
        assert data["kind"] == "schema"
        assert "responses" not in data
        assert "path" not in data
        assert "verb" not in data

    def test_dump_field_order(self):
        data = Table.create(raw_name="Pet", kind="schema", columns=[]).dump()
        assert list(data) == [
            "namesDb", "nameDb", "Name", "name", "Names", "names", "n", "key", "fields", "kind",
        ]


class TestDocumentMeta:
    def test_servers_omitted_when_absent(self):
        meta = DocumentMeta(info=DocumentInfo(title="T", version="1"))
        assert meta.dump() == {"info": {"title": "T", "description": "", "version": "1"}}
