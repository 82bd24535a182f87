"""Entity Lookup — tagged result for ids that may name a task or a folder.

Invariants:
    - LookupResult is either found (kind + record) or missing (kind is None)
    - resolve_first is PURE: picks the first found result in probe order
    - No global id-to-kind index: callers probe each kind in PROBE_ORDER

Design Decisions:
    - Explicit result type over "None means try the next table": the orchestrator
      decides fallback, entity logic only answers for its own kind
"""

from dataclasses import dataclass
from typing import Any, Iterable

from app.core.domain_types import EntityKind


@dataclass(frozen=True)
class LookupResult:
    """Outcome of probing one entity kind for an id."""
    kind: EntityKind | None
    record: Any = None

    @property
    def found(self) -> bool:
        return self.kind is not None and self.record is not None

    @classmethod
    def hit(cls, kind: EntityKind, record: Any) -> "LookupResult":
        if record is None:
            return cls.miss()
        return cls(kind=kind, record=record)

    @classmethod
    def miss(cls) -> "LookupResult":
        return cls(kind=None, record=None)


def resolve_first(results: Iterable[LookupResult]) -> LookupResult:
    """First found result, or a miss when no kind matched."""
    for result in results:
        if result.found:
            return result
    return LookupResult.miss()
