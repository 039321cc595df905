"""ViolationStore — the single accumulation point for findings of one run.

Exactly one Violation exists per principle. The first detection creates it;
later detections only append evidence. Callers get frozen snapshots back.
"""

from typing import Iterator

import structlog

from solidify.models import Evidence, Principle, Violation

logger = structlog.get_logger()


class ViolationHandle:
    """Opaque reference to the mutable slot of one principle in one store."""

    __slots__ = ("principle", "_owner", "_evidences")

    def __init__(self, principle: Principle, owner: "ViolationStore"):
        self.principle = principle
        self._owner = owner
        self._evidences: list[Evidence] = []

    def __repr__(self) -> str:
        return f"ViolationHandle({self.principle.value}, evidences={len(self._evidences)})"


class ViolationStore:
    """Append-only aggregation of evidence keyed by principle."""

    def __init__(self):
        # dicts keep insertion order, which is the order of first detection
        self._handles: dict[Principle, ViolationHandle] = {}

    def get_or_create(self, principle: Principle) -> ViolationHandle:
        handle = self._handles.get(principle)
        if handle is None:
            handle = ViolationHandle(principle, self)
            self._handles[principle] = handle
            logger.debug("violation_created", principle=principle.value)
        return handle

    def append(self, handle: ViolationHandle, evidence: Evidence) -> None:
        """Append evidence to a handle obtained from this store."""
        if handle._owner is not self or self._handles.get(handle.principle) is not handle:
            raise ValueError(f"Handle for {handle.principle.value} does not belong to this store")
        handle._evidences.append(evidence)
        logger.debug(
            "violation_recorded",
            principle=handle.principle.value,
            file=evidence.file,
            line=evidence.line,
        )

    def record(self, principle: Principle, evidence: Evidence) -> None:
        self.append(self.get_or_create(principle), evidence)

    def violations(self) -> list[Violation]:
        """Snapshot of all violations, ordered by first detection."""
        return [
            Violation(principle=handle.principle, evidences=tuple(handle._evidences))
            for handle in self._handles.values()
        ]

    def __contains__(self, principle: Principle) -> bool:
        return principle in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[Principle]:
        return iter(self._handles)
