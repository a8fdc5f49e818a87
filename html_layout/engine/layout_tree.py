from __future__ import annotations

"""
Layout tree produced from the parsed HTML element tree.

Each node mirrors one element that survives conversion. Engines build nodes
recursively: a container engine asks the dispatcher to build its children,
while leaves describe atomic content such as text or images.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from ..exceptions import HtmlLayoutError, LayoutError


class LayoutNode(Protocol):
    """Common protocol for all nodes."""

    kind: str
    source: Any
    children: List["LayoutNode"]


@dataclass(slots=True)
class BaseNode:
    kind: str
    source: Any = None
    style: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    children: List["LayoutNode"] = field(default_factory=list)

    def append(self, child: "LayoutNode") -> None:
        self.children.append(child)

    def extend(self, nodes: Iterable["LayoutNode"]) -> None:
        self.children.extend(nodes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "style": dict(self.style),
            "metadata": dict(self.metadata),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(slots=True)
class LeafNode(BaseNode):
    """Leaf nodes do not accept children."""

    def append(self, child: "LayoutNode") -> None:
        raise LayoutError(f"Leaf node '{self.kind}' cannot accept children")

    def extend(self, nodes: Iterable["LayoutNode"]) -> None:
        raise LayoutError(f"Leaf node '{self.kind}' cannot accept children")


class Engine(Protocol):
    """
    Engine interface used by the dispatcher to build nodes recursively.
    """

    def can_handle(self, element: Any) -> bool:
        ...

    def build(self, element: Any, dispatcher: "Dispatcher", **context: Any) -> Optional[LayoutNode]:
        ...


class Dispatcher:
    """Maps parsed nodes to the appropriate engine."""

    def __init__(self, engines: Sequence[Engine]) -> None:
        self._engines: List[Engine] = list(engines)

    def register(self, engine: Engine) -> None:
        self._engines.append(engine)

    def dispatch(self, element: Any, **context: Any) -> Optional[LayoutNode]:
        for engine in self._engines:
            if not engine.can_handle(element):
                continue
            try:
                return engine.build(element, self, **context)
            except HtmlLayoutError:
                raise
            except Exception as exc:
                raise LayoutError(f"Engine {type(engine).__name__} failed for {element!r}", str(exc)) from exc
        raise LookupError(f"No layout engine registered for element {element!r}")

    def dispatch_children(self, nodes: Iterable[Any], **context: Any) -> List[LayoutNode]:
        built = (self.dispatch(node, **context) for node in nodes)
        return [node for node in built if node is not None]


def walk(node: LayoutNode) -> Iterable[LayoutNode]:
    """Simple DFS walk over the layout tree."""
    yield node
    for child in node.children:
        yield from walk(child)
