"""Interchange rendering of program trees.

The JSON form is what other processes consume: one object per node with
``name`` and whichever of ``next``, ``alternate``, ``condition``, ``body`` and
``value`` are present. Absent slots are left out rather than set to null.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .ast import BooleanLoop, Command, Conditional, CountedLoop, Flow, Start

NAME = "name"
NEXT = "next"
ALTERNATE = "alternate"
CONDITION = "condition"
BODY = "body"
VALUE = "value"


def _flow_to_dict(node: Flow) -> Dict[str, Any]:
    out: Dict[str, Any] = {}

    if isinstance(node, Command):
        pass
    elif isinstance(node, Conditional):
        if node.alternate is not None:
            out[ALTERNATE] = _flow_to_dict(node.alternate)
    elif isinstance(node, BooleanLoop):
        if node.condition is not None:
            out[CONDITION] = node.condition.value
        if node.body is not None:
            out[BODY] = _flow_to_dict(node.body)
    elif isinstance(node, CountedLoop):
        if node.value is not None:
            out[VALUE] = node.value.value
        if node.body is not None:
            out[BODY] = _flow_to_dict(node.body)
    else:
        raise ValueError(f"unknown flow node {node!r}")

    out[NAME] = node.name
    if node.next is not None:
        out[NEXT] = _flow_to_dict(node.next)
    return out


def program_to_dict(program: Start) -> Dict[str, Any]:
    out: Dict[str, Any] = {NAME: program.name}
    if program.next is not None:
        out[NEXT] = _flow_to_dict(program.next)
    return out


def print_program(program: Start, *, indent: Optional[int] = None) -> str:
    """Return ``program`` as JSON with sorted keys, compact unless ``indent`` is given."""

    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(program_to_dict(program), sort_keys=True, indent=indent, separators=separators)


__all__ = ["program_to_dict", "print_program"]
