"""End-to-end: document on disk -> sorted JSON envelope."""

import json
from pathlib import Path

from openapi_entities.cli import convert_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestOrdersDocument:
    def test_data_sorted_by_key(self):
        envelope = json.loads(convert_document(FIXTURES / "orders.yaml"))
        assert [t["key"] for t in envelope["data"]] == ["Item", "ListOrders", "Order"]

    def test_envelope_wrapper(self):
        envelope = json.loads(convert_document(FIXTURES / "orders.yaml"))
        assert envelope["kind"] == "openapi"
        assert envelope["srcKind"] == "openapi"
        assert envelope["meta"] == {"info": {"title": "Orders", "description": "", "version": "2.1"}}

    def test_operation_entity(self):
        envelope = json.loads(convert_document(FIXTURES / "orders.yaml"))
        list_orders = envelope["data"][1]
        assert list_orders["kind"] == "path"
        assert list_orders["path"] == "/orders"
        assert list_orders["verb"] == "get"
        assert list_orders["fields"] == []
        assert list_orders["responses"]["200"] == {
            "Type": "[]Order",
            "baseType": "Order",
            "isArray": True,
            "notNull": True,
            "comment": "All orders",
        }

    def test_schema_entity_fields(self):
        envelope = json.loads(convert_document(FIXTURES / "orders.yaml"))
        order = envelope["data"][2]
        assert order == {
            "namesDb": "orders",
            "nameDb": "order",
            "Name": "Order",
            "name": "order",
            "Names": "Orders",
            "names": "orders",
            "n": "o",
            "key": "Order",
            "fields": [
                {
                    "namesDb": "ids",
                    "nameDb": "id",
                    "nameJson": "id",
                    "Name": "ID",
                    "name": "iD",
                    "Names": "IDs",
                    "names": "iDs",
                    "nameExact": "id",
                    "Type": "string",
                    "baseType": "string",
                    "isArray": False,
                    "notNull": True,
                    "key": "id",
                },
                {
                    "namesDb": "items",
                    "nameDb": "items",
                    "nameJson": "items",
                    "Name": "Items",
                    "name": "items",
                    "Names": "Items",
                    "names": "items",
                    "nameExact": "items",
                    "Type": "[]*Item",
                    "baseType": "*Item",
                    "isArray": True,
                    "notNull": False,
                    "key": "items",
                },
            ],
            "kind": "schema",
        }


class TestDeterminism:
    def test_byte_identical_reruns(self):
        first = convert_document(FIXTURES / "petstore.yaml")
        second = convert_document(FIXTURES / "petstore.yaml")
        assert first == second

    def test_petstore_order(self):
        envelope = json.loads(convert_document(FIXTURES / "petstore.yaml"))
        assert [t["key"] for t in envelope["data"]] == [
            "CreatePet", "DeletePet", "Error", "ListPets", "Owner", "Pet", "ShowPetByID",
        ]
