"""
Format-agnostic tree used to bridge JSON, YAML and XML.

A node is one of Null, Scalar, Sequence or Mapping. Parsers build a fresh tree
per call and serializers consume it; nothing is shared between calls.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Union

ScalarValue = Union[str, int, float, bool]


@dataclass(frozen=True)
class Null:
    """Absent value (JSON null, YAML ~, empty XML text)."""

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class Scalar:
    """A string, number or boolean leaf."""

    value: ScalarValue

    def to_python(self) -> ScalarValue:
        return self.value


@dataclass
class Sequence:
    """Ordered list of nodes."""

    items: List['Node'] = field(default_factory=list)

    def append(self, node: 'Node') -> None:
        self.items.append(node)

    def to_python(self) -> List[Any]:
        return [item.to_python() for item in self.items]


@dataclass
class Mapping:
    """Insertion-ordered string keys to nodes."""

    entries: Dict[str, 'Node'] = field(default_factory=dict)

    def to_python(self) -> Dict[str, Any]:
        return {key: value.to_python() for key, value in self.entries.items()}


Node = Union[Null, Scalar, Sequence, Mapping]


def key_text(key: Any) -> str:
    """Render a non-string mapping key the way JSON would."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return 'true' if key else 'false'
    if key is None:
        return 'null'
    return str(key)


def from_python(data: Any, _ancestors: Optional[Set[int]] = None) -> Node:
    """
    Build a tree from plain Python data (the output of json/yaml loaders).

    Raises:
        TypeError: If data holds values outside the JSON data model
        ValueError: If data holds a non-finite float or refers to itself
    """
    if data is None:
        return Null()
    if isinstance(data, float) and not math.isfinite(data):
        raise ValueError(f"Non-finite number {data} is not representable in JSON")
    if isinstance(data, (str, bool, int, float)):
        return Scalar(data)
    if not isinstance(data, (dict, list, tuple)):
        raise TypeError(f"Unsupported value of type {type(data).__name__}")

    # YAML anchors can build containers that contain themselves
    ancestors = _ancestors if _ancestors is not None else set()
    if id(data) in ancestors:
        raise ValueError("Recursive reference: a value contains itself")
    ancestors.add(id(data))
    try:
        if isinstance(data, dict):
            return Mapping({key_text(key): from_python(value, ancestors) for key, value in data.items()})
        return Sequence([from_python(item, ancestors) for item in data])
    finally:
        ancestors.discard(id(data))


def to_python(node: Node) -> Any:
    return node.to_python()


def add_child(mapping: Mapping, name: str, node: Node) -> None:
    """
    Attach a child under name, promoting repeated names to a Sequence.

    The first child is stored as-is. A second child with the same name turns
    the stored value into a two-element Sequence and later ones are appended.
    One child and several children therefore produce different shapes; XML
    parsing relies on this exact behaviour.
    """
    existing = mapping.entries.get(name)
    if existing is None:
        mapping.entries[name] = node
    elif isinstance(existing, Sequence):
        # element children are never sequences, so this one was promoted here
        existing.append(node)
    else:
        mapping.entries[name] = Sequence([existing, node])
