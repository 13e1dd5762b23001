"""Edit scripts replayed through a session."""

import pytest
import yaml

from oaedit.editor.errors import CommandExecutionError
from oaedit.script import ScriptError, parse_steps, run_script, step_names


SCRIPT = """
steps:
  - set: {target: /info, property: title, value: Zoo}
  - create-path: /orders
  - create-operation: {path: /orders, method: post}
  - add-response: {operation: /paths/~1orders/post, status: 201, description: Created}
  - add-tag: {name: orders, description: Order operations}
  - rename-tag: {from: pets, to: animals}
  - add-server: https://staging.example.com
  - set-extension: {target: /info, name: x-audience, value: internal}
  - create-schema: {name: Order, content: {type: object, properties: {id: {type: integer}}}}
  - delete-schema: Pets
  - select: /components/schemas/Order
"""


def test_full_script(session):
    log = run_script(session, yaml.safe_load(SCRIPT))
    doc = session.to_dict()

    assert doc["info"]["title"] == "Zoo"
    assert doc["info"]["x-audience"] == "internal"
    assert doc["paths"]["/orders"]["post"]["responses"]["201"] == {"description": "Created"}
    assert [t["name"] for t in doc["tags"]] == ["animals", "orders"]
    assert doc["paths"]["/pets"]["get"]["tags"] == ["animals"]
    assert doc["servers"][-1] == {"url": "https://staging.example.com"}
    assert list(doc["components"]["schemas"]) == ["Pet", "Order"]

    assert len(log) == 11
    assert log[1] == "create-path /orders"
    assert log[-1] == "select /components/schemas/Order"
    assert session.engine.undo_count == 10


def test_undo_and_redo_steps(session):
    log = run_script(
        session,
        [
            {"set": {"target": "/info", "property": "title", "value": "A"}},
            {"set": {"target": "/info", "property": "title", "value": "B"}},
            "undo",
            "undo",
            "redo",
            "redo",
            "redo",
        ],
    )
    assert session.document.info.title == "B"
    assert log[-1] == "redo (nothing to redo)"


def test_delete_steps(session):
    run_script(
        session,
        [
            {"delete-response": {"operation": "/paths/~1pets~1{petId}/get", "status": 404}},
            {"delete-operation": {"path": "/pets", "method": "post"}},
            {"delete-path": "/pets/{petId}"},
            {"delete-tag": "pets"},
            {"delete-server": "https://api.example.com/v1"},
            {"ensure": {"parent": "/info", "child": "contact"}},
        ],
    )
    doc = session.to_dict()
    assert list(doc["paths"]) == ["/pets"]
    assert "post" not in doc["paths"]["/pets"]
    assert "tags" not in doc
    assert "servers" not in doc
    assert doc["info"]["contact"] == {}


def test_replace_step(session):
    run_script(session, [{"replace": {"target": "/components/schemas/Pet", "content": {"type": "string"}}}])
    assert session.to_dict()["components"]["schemas"]["Pet"] == {"type": "string"}


def test_operation_content_steps(session):
    run_script(
        session,
        yaml.safe_load(
            """
            - add-parameter: {parent: /paths/~1pets/get, name: limit, in: query, type: integer}
            - add-request-body: {operation: /paths/~1pets/post}
            - add-media-type: {parent: /paths/~1pets/post/requestBody, type: application/json}
            - set-media-type-schema:
                target: /paths/~1pets/post/requestBody/content/application~1json
                ref: "#/components/schemas/Pet"
            - add-header: {response: /paths/~1pets/get/responses/200, name: X-Next, type: string}
            - delete-parameter: {parent: "/paths/~1pets~1{petId}/get", name: petId, in: path}
            """
        ),
    )
    paths = session.to_dict()["paths"]
    assert paths["/pets"]["get"]["parameters"][0]["schema"] == {"type": "integer"}
    assert paths["/pets"]["post"]["requestBody"] == {
        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}}
    }
    assert paths["/pets"]["get"]["responses"]["200"]["headers"]["X-Next"]["schema"] == {"type": "string"}
    assert "parameters" not in paths["/pets/{petId}"]["get"]


def test_security_steps(session):
    run_script(
        session,
        [
            {"add-security-scheme": {"name": "key", "type": "apiKey", "parameter": "X-Key", "in": "header"}},
            {"update-security-scheme": {"name": "key", "type": "apiKey", "description": "API key"}},
            {"add-security-requirement": {"schemes": {"key": []}}},
            {"add-security-requirement": {"schemes": {"key": []}, "parent": "/paths/~1pets/post"}},
            {"delete-all-security-requirements": "/"},
            "delete-all-tags",
        ],
    )
    doc = session.to_dict()
    assert doc["components"]["securitySchemes"]["key"] == {
        "type": "apiKey",
        "description": "API key",
        "name": "X-Key",
        "in": "header",
    }
    assert doc["security"] == []
    assert doc["paths"]["/pets"]["post"]["security"] == [{"key": []}]
    assert "tags" not in doc

    for _ in range(6):
        session.undo()
    assert "securitySchemes" not in session.to_dict()["components"]


def test_failing_step_keeps_earlier_steps(session):
    with pytest.raises(CommandExecutionError):
        run_script(
            session,
            [
                {"set": {"target": "/info", "property": "title", "value": "A"}},
                {"set": {"target": "/components/schemas/Nope", "property": "type", "value": "x"}},
            ],
        )
    assert session.document.info.title == "A"
    assert session.engine.undo_count == 1


@pytest.mark.parametrize(
    "data",
    [
        None,
        "undo",
        {"steps": "undo"},
        [{"set": {}, "undo": None}],
        ["frobnicate"],
        [42],
    ],
)
def test_malformed_scripts(data):
    with pytest.raises(ScriptError):
        parse_steps(data)


def test_missing_argument(session):
    with pytest.raises(ScriptError, match="missing argument"):
        run_script(session, [{"rename-tag": "pets"}])


def test_step_names():
    names = step_names()
    assert "create-path" in names
    assert "undo" in names
    assert names == sorted(names)
