#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Field conditions
================
Boolean expressions that decide whether a form field is hidden or disabled
(``hide-if`` / ``disable-if``).  A condition arrives as nested lists from the
field configuration:

    ["===", "check1", "1"]
    ["!==", "select1", "a"]
    ["NOT", <condition>]
    ["AND" | "OR" | "NAND" | "NOR", <condition>, <condition>, ...]

``parse_condition()`` validates the whole tree once and returns typed nodes;
``evaluate()`` then walks those nodes without re-checking structure.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union


# -----------------------------------------------------------------------------

COMPARISON_OPS = ("===", "!==")
JUNCTION_OPS = ("AND", "OR", "NAND", "NOR")

FieldValue = Union[str, bool, int, float, None]
FieldValueMap = Mapping[str, FieldValue]


class ConditionValidationError(ValueError):
    """A condition tree is structurally invalid."""


# -----------------------------------------------------------------------------
# Nodes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Comparison:
    op: str
    field: str
    value: str


@dataclass(frozen=True)
class Not:
    child: "ConditionNode"


@dataclass(frozen=True)
class Junction:
    op: str
    children: tuple["ConditionNode", ...]


ConditionNode = Union[Comparison, Not, Junction]


# -----------------------------------------------------------------------------
# Parsing / validation
# -----------------------------------------------------------------------------

def _type_name(value: Any) -> str:
    """Name *value*'s type the way the configuration format would."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "double"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _check_node(raw: Any, index: Optional[int] = None) -> tuple[Any, Sequence[Any]]:
    """Validate one node's shape (not its children); return ``(op, params)``."""
    if not _is_array(raw):
        where = "" if index is None else f" at index {index}"
        raise ConditionValidationError(f"expected array, found {_type_name(raw)}{where}")

    op = raw[0] if raw else None
    params: Sequence[Any] = raw[1:]

    if op == "NOT":
        if len(params) != 1:
            raise ConditionValidationError("NOT takes exactly one parameter")
    elif op in JUNCTION_OPS:
        if not params:
            raise ConditionValidationError(f"{op} takes at least one parameter")
    elif op in COMPARISON_OPS:
        if len(params) != 2:
            raise ConditionValidationError(f"{op} takes exactly two parameters")
        if not all(isinstance(p, str) for p in params):
            raise ConditionValidationError(f"parameters for {op} must be strings")
    else:
        raise ConditionValidationError("unknown operation")
    return op, params


def parse_condition(raw: Any) -> ConditionNode:
    """Validate *raw* depth-first and return the typed tree.

    Raises ``ConditionValidationError`` naming the first rule broken.  Nesting
    depth is bounded only by memory: the walk keeps its own stack.
    """
    op, params = _check_node(raw)
    if op in COMPARISON_OPS:
        return Comparison(op, params[0], params[1])

    # Frames of (op, raw params, parsed children so far)
    stack: list[tuple[str, Sequence[Any], list[ConditionNode]]] = [(op, params, [])]
    while True:
        op, params, parsed = stack[-1]
        if len(parsed) < len(params):
            index = len(parsed)
            child_op, child_params = _check_node(params[index], index)
            if child_op in COMPARISON_OPS:
                parsed.append(Comparison(child_op, child_params[0], child_params[1]))
            else:
                stack.append((child_op, child_params, []))
            continue

        stack.pop()
        node: ConditionNode = Not(parsed[0]) if op == "NOT" else Junction(op, tuple(parsed))
        if not stack:
            return node
        stack[-1][2].append(node)


# -----------------------------------------------------------------------------
# Evaluation
# -----------------------------------------------------------------------------

def field_value_as_string(value: FieldValue) -> str:
    """Coerce a submitted value for comparison: checked boxes are ``'1'``."""
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    return str(value)


def evaluate(node: ConditionNode, values: FieldValueMap) -> bool:
    """Evaluate a parsed condition against the submitted field values.

    A field missing from *values* compares as the empty string.  Junctions
    stop at the first child that decides them.
    """
    # Frames of [NOT or junction node, index of the child being evaluated]
    stack: list[list[Any]] = []
    while True:
        if isinstance(node, Comparison):
            equal = field_value_as_string(values.get(node.field)) == node.value
            result = equal if node.op == "===" else not equal
        elif isinstance(node, Not):
            stack.append([node, 0])
            node = node.child
            continue
        elif node.children:
            stack.append([node, 0])
            node = node.children[0]
            continue
        else:
            result = node.op in ("AND", "NOR")

        # Hand the result up until some junction still needs another child.
        while stack:
            frame = stack[-1]
            parent, index = frame
            if isinstance(parent, Not):
                result = not result
                stack.pop()
                continue
            decided = not result if parent.op in ("AND", "NAND") else result
            if decided or index + 1 == len(parent.children):
                stack.pop()
                result = result if parent.op in ("AND", "OR") else not result
                continue
            frame[1] = index + 1
            node = parent.children[index + 1]
            break
        else:
            return result


# -----------------------------------------------------------------------------

class ConditionEvaluator:
    """A condition parsed once, evaluated many times.

    >>> hide_if = ConditionEvaluator(["===", "check1", "1"])
    >>> hide_if.evaluate({"check1": True})
    True
    """

    def __init__(self, raw: Any) -> None:
        self.raw = raw
        self.node: ConditionNode = parse_condition(raw)

    def evaluate(self, values: FieldValueMap) -> bool:
        return evaluate(self.node, values)

    def field_names(self) -> set[str]:
        """Names of all fields the condition reads."""
        names: set[str] = set()
        stack: list[ConditionNode] = [self.node]
        while stack:
            node = stack.pop()
            if isinstance(node, Comparison):
                names.add(node.field)
            elif isinstance(node, Not):
                stack.append(node.child)
            else:
                stack.extend(node.children)
        return names


def maybe_condition(raw: Optional[Any]) -> Optional[ConditionEvaluator]:
    return ConditionEvaluator(raw) if raw is not None else None


# -----------------------------------------------------------------------------
