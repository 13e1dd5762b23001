"""Edit scripts: a YAML list of steps replayed through an EditorSession.

    steps:
      - create-path: /pets
      - create-operation: {path: /pets, method: get}
      - add-response: {operation: /paths/~1pets/get, status: 200, description: OK}
      - set: {target: /info, property: title, value: Pet Store}
      - undo

Each step is either a bare name (undo, redo) or a one-key mapping from the
step name to its arguments. A scalar argument is shorthand for the step's
first argument.
"""

from __future__ import annotations

from typing import Any, Callable

from oaedit.commands.base import Command
from oaedit.commands.extensions import AddExtensionCommand, DeleteAllExtensionsCommand, DeleteExtensionCommand
from oaedit.commands.media_types import AddMediaTypeCommand, ChangeMediaTypeSchemaCommand, DeleteMediaTypeCommand
from oaedit.commands.parameters import AddParameterCommand, DeleteParameterCommand
from oaedit.commands.path_items import (
    CreateOperationCommand,
    CreatePathCommand,
    DeleteOperationCommand,
    DeletePathCommand,
)
from oaedit.commands.properties import ChangePropertyCommand, EnsureChildNodeCommand, UpdateNodeCommand
from oaedit.commands.request_bodies import AddRequestBodyCommand, DeleteRequestBodyCommand
from oaedit.commands.responses import (
    AddResponseCommand,
    AddResponseHeaderCommand,
    DeleteResponseCommand,
    DeleteResponseHeaderCommand,
)
from oaedit.commands.schemas import CreateSchemaCommand, DeleteSchemaCommand
from oaedit.commands.security import (
    AddSecurityRequirementCommand,
    AddSecuritySchemeCommand,
    DeleteAllSecurityRequirementsCommand,
    DeleteAllSecuritySchemesCommand,
    DeleteSecurityRequirementCommand,
    DeleteSecuritySchemeCommand,
    SecuritySchemeData,
    UpdateSecuritySchemeCommand,
)
from oaedit.commands.servers import AddServerCommand, DeleteAllServersCommand, DeleteServerCommand
from oaedit.commands.tags import AddTagCommand, DeleteAllTagsCommand, DeleteTagCommand, RenameTagCommand
from oaedit.editor.session import EditorSession


class ScriptError(ValueError):
    """An edit script is malformed."""


CommandBuilder = Callable[[dict[str, Any]], Command]

# step name -> (first argument name, builder)
_COMMANDS: dict[str, tuple[str, CommandBuilder]] = {}


def register_step(name: str, first_arg: str, builder: CommandBuilder) -> None:
    """Register a command-producing step."""
    _COMMANDS[name] = (first_arg, builder)


def step_names() -> list[str]:
    return sorted([*_COMMANDS, "select", "undo", "redo"])


register_step("set", "target", lambda a: ChangePropertyCommand(a["target"], a["property"], a.get("value")))
register_step("ensure", "parent", lambda a: EnsureChildNodeCommand(a["parent"], a["child"]))
register_step("replace", "target", lambda a: UpdateNodeCommand(a["target"], a["content"]))
register_step("create-path", "name", lambda a: CreatePathCommand(a["name"]))
register_step("delete-path", "name", lambda a: DeletePathCommand(a["name"]))
register_step("create-operation", "path", lambda a: CreateOperationCommand(a["path"], a["method"]))
register_step("delete-operation", "path", lambda a: DeleteOperationCommand(a["path"], a["method"]))
register_step("create-schema", "name", lambda a: CreateSchemaCommand(a["name"], a.get("content")))
register_step("delete-schema", "name", lambda a: DeleteSchemaCommand(a["name"]))
register_step("add-tag", "name", lambda a: AddTagCommand(a["name"], a.get("description")))
register_step("delete-tag", "name", lambda a: DeleteTagCommand(a["name"]))
register_step("rename-tag", "from", lambda a: RenameTagCommand(a["from"], a["to"]))
register_step(
    "add-server",
    "url",
    lambda a: AddServerCommand(a["url"], a.get("description"), a.get("parent", "/")),
)
register_step("delete-server", "url", lambda a: DeleteServerCommand(a["url"], a.get("parent", "/")))
register_step(
    "add-response",
    "operation",
    lambda a: AddResponseCommand(a["operation"], str(a["status"]), a.get("description", "")),
)
register_step("delete-response", "operation", lambda a: DeleteResponseCommand(a["operation"], str(a["status"])))
register_step("set-extension", "target", lambda a: AddExtensionCommand(a["target"], a["name"], a.get("value")))
register_step("delete-extension", "target", lambda a: DeleteExtensionCommand(a["target"], a["name"]))
register_step("delete-all-extensions", "target", lambda a: DeleteAllExtensionsCommand(a["target"]))
register_step("delete-all-tags", "name", lambda a: DeleteAllTagsCommand())
register_step("delete-all-servers", "parent", lambda a: DeleteAllServersCommand(a.get("parent", "/")))
register_step(
    "add-parameter",
    "parent",
    lambda a: AddParameterCommand(
        a["parent"],
        a["name"],
        a["in"],
        a.get("description"),
        bool(a.get("required", False)),
        a.get("type", "string"),
    ),
)
register_step("delete-parameter", "parent", lambda a: DeleteParameterCommand(a["parent"], a["name"], a["in"]))
register_step("add-request-body", "operation", lambda a: AddRequestBodyCommand(a["operation"], a.get("description")))
register_step("delete-request-body", "operation", lambda a: DeleteRequestBodyCommand(a["operation"]))
register_step("add-media-type", "parent", lambda a: AddMediaTypeCommand(a["parent"], a["type"]))
register_step("delete-media-type", "parent", lambda a: DeleteMediaTypeCommand(a["parent"], a["type"]))
register_step(
    "set-media-type-schema",
    "target",
    lambda a: ChangeMediaTypeSchemaCommand(a["target"], a.get("ref"), a.get("type")),
)
register_step(
    "add-header",
    "response",
    lambda a: AddResponseHeaderCommand(
        a["response"], a["name"], a.get("description", ""), a.get("type"), a.get("ref")
    ),
)
register_step("delete-header", "response", lambda a: DeleteResponseHeaderCommand(a["response"], a["name"]))
register_step("add-security-scheme", "name", lambda a: AddSecuritySchemeCommand(_scheme_data(a)))
register_step("update-security-scheme", "name", lambda a: UpdateSecuritySchemeCommand(_scheme_data(a)))
register_step("delete-security-scheme", "name", lambda a: DeleteSecuritySchemeCommand(a["name"]))
register_step("delete-all-security-schemes", "name", lambda a: DeleteAllSecuritySchemesCommand())
register_step(
    "add-security-requirement",
    "schemes",
    lambda a: AddSecurityRequirementCommand(a["schemes"], a.get("index"), a.get("parent", "/")),
)
register_step(
    "delete-security-requirement",
    "index",
    lambda a: DeleteSecurityRequirementCommand(int(a["index"]), a.get("parent", "/")),
)
register_step(
    "delete-all-security-requirements",
    "parent",
    lambda a: DeleteAllSecurityRequirementsCommand(a.get("parent", "/")),
)


def _scheme_data(args: dict[str, Any]) -> SecuritySchemeData:
    return SecuritySchemeData(
        name=args["name"],
        type=args["type"],
        description=args.get("description"),
        parameter_name=args.get("parameter"),
        location=args.get("in"),
        scheme=args.get("scheme"),
        bearer_format=args.get("bearer-format"),
        flow=args.get("flow"),
        authorization_url=args.get("authorization-url"),
        token_url=args.get("token-url"),
        open_id_connect_url=args.get("open-id-connect-url"),
    )


def parse_steps(data: Any) -> list[tuple[str, dict[str, Any]]]:
    """Normalize a loaded script to (step name, arguments) pairs."""
    if isinstance(data, dict):
        data = data.get("steps")
    if not isinstance(data, list):
        raise ScriptError("Script must be a list of steps (or a mapping with 'steps')")

    steps: list[tuple[str, dict[str, Any]]] = []
    for index, raw in enumerate(data, start=1):
        if isinstance(raw, str):
            name, args = raw, {}
        elif isinstance(raw, dict) and len(raw) == 1:
            name, value = next(iter(raw.items()))
            args = _arguments(name, value)
        else:
            raise ScriptError(f"Step {index}: expected a step name or a one-key mapping")

        if name not in _COMMANDS and name not in ("select", "undo", "redo"):
            raise ScriptError(f"Step {index}: unknown step '{name}'")
        steps.append((name, args))
    return steps


def _arguments(name: str, value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return dict(value)
    if value is None:
        return {}
    first = _COMMANDS[name][0] if name in _COMMANDS else "target"
    return {first: value}


def build_command(name: str, args: dict[str, Any]) -> Command:
    _, builder = _COMMANDS[name]
    try:
        return builder(args)
    except KeyError as e:
        raise ScriptError(f"Step '{name}' is missing argument {e}") from None


def run_script(session: EditorSession, data: Any) -> list[str]:
    """Run every step against the session's document. Returns a log of what ran.

    Editor errors propagate; steps already applied stay applied.
    """
    log: list[str] = []
    for name, args in parse_steps(data):
        if name == "undo":
            log.append("undo" if session.undo() else "undo (nothing to undo)")
        elif name == "redo":
            log.append("redo" if session.redo() else "redo (nothing to redo)")
        elif name == "select":
            session.select(args.get("target", "/"), args.get("property"))
            log.append(f"select {session.selection.selected_path}")
        else:
            command = build_command(name, args)
            session.execute_command(command, f"{name} {_summary(args)}".rstrip())
            log.append(session.engine.peek_undo().description)
    return log


def _summary(args: dict[str, Any]) -> str:
    return " ".join(str(v) for v in args.values() if isinstance(v, (str, int)))
