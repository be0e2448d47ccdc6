"""Field descriptors declared by wizard steps.

A field names one piece of step data. It may carry a pydantic type
annotation used to validate submissions, a transform applied to the
validated value, and the set of other fields it depends on.

When a field this one depends on is submitted with a different value
than the one stored, this field's stored value is discarded.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable


class Field:
    def __init__(
        self,
        name: str,
        rule: Any = Any,
        *,
        required: bool = False,
        default: Any = None,
        depends_on: Iterable[str] = (),
        transform: Callable[[Any], Any] | None = None,
    ):
        self.name = name
        self.rule = rule
        self.required = required
        self.default = default
        self.dependencies = frozenset(depends_on)
        self.transform = transform

        if name in self.dependencies:
            raise ValueError(f"Field [{name}] cannot depend on itself")

    def should_invalidate(self, payload: dict, stored: dict) -> bool:
        """True if any dependency is in ``payload`` with a changed value.

        ``stored`` holds the values before the submission is merged.
        """
        return any(
            key in payload and payload[key] != stored.get(key)
            for key in self.dependencies
        )

    def apply_transform(self, value: Any) -> Any:
        if self.transform is None:
            return value
        return self.transform(value)

    def __repr__(self) -> str:
        deps = ", ".join(sorted(self.dependencies))
        return f"Field({self.name!r}, depends_on=[{deps}])"


def check_dependency_cycles(fields: Iterable[Field]) -> None:
    """Raise ValueError if the dependency graph of ``fields`` has a cycle.

    Dependencies on names that no field declares are leaves.
    """
    graph: dict[str, set[str]] = {}
    for f in fields:
        graph.setdefault(f.name, set()).update(f.dependencies)
    visiting: set[str] = set()
    done: set[str] = set()

    def visit(name: str, path: list[str]) -> None:
        if name in done or name not in graph:
            return
        if name in visiting:
            cycle = " -> ".join(path[path.index(name):] + [name])
            raise ValueError(f"Field dependency cycle: {cycle}")
        visiting.add(name)
        for dep in sorted(graph[name]):
            visit(dep, path + [name])
        visiting.discard(name)
        done.add(name)

    for name in graph:
        visit(name, [])
