"""
Delta to outline normalization.

Responsibilities:
- read each operation's list attributes into an explicit line marker
- replay operations in order, accumulating text until a list-terminating break
- rebuild the outline tree from indent levels with a call-local parent stack
- reject deltas whose shape is wrong before they reach the normalizer
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .models import Delta, DeltaOp, OutlineNode
from .rules import DEFAULT_INDENT, LINE_BREAK, LIST_KINDS, MAX_INDENT


class DeltaFormatError(ValueError):
    """Raised when a delta document does not have the expected shape."""


@dataclass(frozen=True)
class NoListMarker:
    pass


@dataclass(frozen=True)
class ListMarker:
    kind: str
    indent: Optional[int] = None


LineMarker = Union[NoListMarker, ListMarker]


def _indent_of(attributes: Mapping[str, Any]) -> Optional[int]:
    indent = attributes.get("indent")
    # bool is an int subclass, an editor never means True as a level
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        return None
    return min(indent, MAX_INDENT)


def line_marker(op: DeltaOp) -> LineMarker:
    """
    Read an operation's list attributes.

    Rules:
    - no attributes, non-mapping attributes or an unknown list kind -> NoListMarker
    - a known list kind -> ListMarker, with the indent when it is a non-negative int
    - indents deeper than MAX_INDENT are clamped to it
    """
    attributes = op.attributes
    if not isinstance(attributes, Mapping):
        return NoListMarker()

    kind = attributes.get("list")
    if kind not in LIST_KINDS:
        return NoListMarker()

    return ListMarker(kind=kind, indent=_indent_of(attributes))


def delta_to_outline(delta: Delta) -> List[OutlineNode]:
    """
    Rebuild the outline forest described by a delta document.

    Rules:
    - text is accumulated across operations (embedded line breaks dropped) until
      a "\\n" insert carrying a list marker terminates the line
    - the terminator's indent wins; otherwise the pending indent of the line applies
    - the parent stack is popped while its top indent is >= the line indent, so
      equal indents become siblings, never children
    - blank lines produce no node and are not used as indent references
    - trailing text without a terminating break is discarded
    """
    forest: List[OutlineNode] = []
    stack: List[Tuple[OutlineNode, int]] = []

    text = ""
    pending_indent = DEFAULT_INDENT

    for op in delta.ops:
        marker = line_marker(op)

        if op.insert == LINE_BREAK and isinstance(marker, ListMarker):
            value = text.strip()

            if value:
                indent = marker.indent if marker.indent is not None else pending_indent
                node = OutlineNode(value=value)

                while stack and stack[-1][1] >= indent:
                    stack.pop()

                if stack:
                    stack[-1][0].children.append(node)
                else:
                    forest.append(node)
                stack.append((node, indent))

            text = ""
            pending_indent = DEFAULT_INDENT

        elif isinstance(op.insert, str):
            text += op.insert.replace(LINE_BREAK, "")
            if isinstance(marker, ListMarker) and marker.indent is not None:
                pending_indent = marker.indent

    return forest


def parse_delta(raw: Union[str, bytes, Mapping[str, Any]]) -> Delta:
    """
    Validate a delta document at the boundary.

    Accepts the decoded mapping or its JSON text. Anything without an `ops`
    list of insert operations raises DeltaFormatError.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DeltaFormatError(f"delta is not valid JSON: {exc.msg}") from exc

    if not isinstance(raw, Mapping):
        raise DeltaFormatError("delta must be a JSON object")
    if "ops" not in raw:
        raise DeltaFormatError("delta is missing 'ops'")
    if not isinstance(raw["ops"], list):
        raise DeltaFormatError("delta 'ops' must be a list")

    try:
        return Delta.model_validate(raw)
    except ValidationError as exc:
        raise DeltaFormatError(f"invalid delta operation: {exc.errors()[0]['msg']}") from exc


def outline_to_wire(forest: List[OutlineNode]) -> List[dict]:
    """Serialize a forest; leaves omit `children`."""
    return [node.model_dump(exclude_defaults=True) for node in forest]
