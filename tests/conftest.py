"""Shared fixtures: a small pet store document and an editor session over it.

No mocks for core behavior: commands run against real node trees.
"""

import copy

import pytest

from oaedit.commands.base import Command
from oaedit.editor.session import EditorSession
from oaedit.model.io import read_document


PETSTORE = {
    "openapi": "3.0.3",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "servers": [{"url": "https://api.example.com/v1"}],
    "tags": [{"name": "pets", "description": "Pet operations"}],
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "tags": ["pets"],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Pets"}},
                        },
                    },
                },
            },
            "post": {
                "operationId": "createPet",
                "tags": ["pets"],
                "responses": {"201": {"description": "Created"}},
            },
        },
        "/pets/{petId}": {
            "get": {
                "operationId": "showPetById",
                "tags": ["pets"],
                "parameters": [
                    {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "A pet",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {"name": {"type": "string"}},
                                },
                            },
                        },
                    },
                    "404": {"description": "Not found"},
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                },
            },
            "Pets": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
        },
    },
}

class RecordingCommand(Command):
    """Appends (name, phase) to a shared log; optionally fails in one phase."""

    def __init__(self, name, log, fail_on=None):
        super().__init__()
        self.name = name
        self.log = log
        self.fail_on = fail_on

    @property
    def description(self):
        return self.name

    def execute(self, document):
        if self.fail_on == "execute":
            raise RuntimeError(f"{self.name} failed")
        self.log.append((self.name, "execute"))

    def undo(self, document):
        if self.fail_on == "undo":
            raise RuntimeError(f"{self.name} failed")
        self.log.append((self.name, "undo"))


@pytest.fixture
def petstore():
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def document(petstore):
    return read_document(petstore)


@pytest.fixture
def session(petstore):
    s = EditorSession()
    s.load_document(petstore)
    return s


@pytest.fixture
def recording():
    return RecordingCommand
