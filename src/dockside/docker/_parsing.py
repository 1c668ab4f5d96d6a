"""Output parsing — ``docker inspect`` JSON and ``docker ps`` tables into domain types.

The inspect document is validated against a pydantic schema; validation
errors are folded into a single field-specific ParseError.
"""

from __future__ import annotations

import json
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationError

from dockside.errors import AmbiguousResultError, ParseError
from dockside.types import Container


class _State(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pid: StrictInt | StrictFloat = Field(alias="Pid")


class _InspectEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(alias="Id", strict=True, min_length=1)
    name: str = Field(alias="Name", strict=True, min_length=1)
    state: _State = Field(alias="State")


_EXPECTED_TYPE = {
    "Id": "string",
    "Name": "string",
    "State": "object",
    "Pid": "number",
}


def _describe(error: Any) -> str:
    loc = [part for part in error["loc"] if part in _EXPECTED_TYPE]
    field = loc[-1] if loc else "document"
    parent = "State" if field == "Pid" else "container"
    kind = error["type"]
    if kind == "missing":
        return f"Unable to find {field} in {parent}"
    if kind == "string_too_short":
        return f"{field} in {parent} is empty"
    return f"{field} in {parent} is not {_EXPECTED_TYPE.get(field, 'the expected')} type"


def parse_container(obj: dict[str, Any]) -> Container:
    """Build a Container from one element of ``docker inspect`` output.

    A pid of 0 means no traceable process and becomes None.
    """
    try:
        entry = _InspectEntry.model_validate(obj)
    except ValidationError as exc:
        messages = dict.fromkeys(_describe(e) for e in exc.errors())
        raise ParseError("; ".join(messages)) from exc

    if not math.isfinite(entry.state.pid):
        raise ParseError("Pid in State is not number type")
    pid = int(entry.state.pid)
    return Container(id=entry.id, name=entry.name, pid=pid if pid != 0 else None)


def parse_inspect_output(container: str, output: str) -> Container:
    """Parse the JSON array printed by ``docker inspect <container>``.

    Exactly one element is required; zero or several raise AmbiguousResultError.
    """
    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Failed to parse JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ParseError(f"Failed to parse JSON: expected an array, got {type(data).__name__}")
    if len(data) != 1:
        raise AmbiguousResultError(container, len(data))

    entry = data[0]
    if not isinstance(entry, dict):
        raise ParseError("Unable to create container: inspect entry is not an object")
    try:
        return parse_container(entry)
    except ParseError as exc:
        raise ParseError(f"Unable to create container: {exc}") from exc


def parse_ps_names(output: str, prefix: str | None = None) -> list[str]:
    """Container names from ``docker ps`` tabular output, in row order.

    The first line is the header. The name is the last column of each row.
    """
    lines = [line for line in output.split("\n") if line]
    if not lines:
        raise ParseError("Failed to parse 'ps' output: missing header line")

    names: list[str] = []
    for line in lines[1:]:
        columns = line.split()
        if not columns:
            continue
        name = columns[-1]
        if prefix is None or name.startswith(prefix):
            names.append(name)
    return names
