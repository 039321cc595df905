"""Tests for the ViolationStore and the violation value types."""

import pytest

from solidify.checkers.store import ViolationStore
from solidify.models import Evidence, Principle, ScanResult, Violation


def _evidence(line: int, file: str = "A.cs") -> Evidence:
    return Evidence(file=file, line=line, snippet=f"class C{line} {{ }}")


class TestViolationStore:
    """One Violation per principle, evidence in append order."""

    def test_get_or_create_is_idempotent(self):
        store = ViolationStore()
        first = store.get_or_create(Principle.SRP)
        assert store.get_or_create(Principle.SRP) is first
        assert len(store) == 1

    def test_append_preserves_order(self):
        store = ViolationStore()
        handle = store.get_or_create(Principle.OCP)
        for line in (5, 1, 9):
            store.append(handle, _evidence(line))
        [violation] = store.violations()
        assert [e.line for e in violation.evidences] == [5, 1, 9]
        assert violation.explanation is None

    def test_violations_ordered_by_first_detection(self):
        store = ViolationStore()
        store.record(Principle.DIP, _evidence(1))
        store.record(Principle.SRP, _evidence(2))
        store.record(Principle.DIP, _evidence(3))
        assert [v.principle for v in store.violations()] == [Principle.DIP, Principle.SRP]
        assert list(store) == [Principle.DIP, Principle.SRP]

    def test_foreign_handle_is_rejected(self):
        mine, theirs = ViolationStore(), ViolationStore()
        handle = theirs.get_or_create(Principle.LSP)
        with pytest.raises(ValueError):
            mine.append(handle, _evidence(1))

    def test_snapshots_are_immutable(self):
        store = ViolationStore()
        store.record(Principle.ISP, _evidence(1))
        snapshot = store.violations()[0]
        store.record(Principle.ISP, _evidence(2))
        assert len(snapshot.evidences) == 1
        assert len(store.violations()[0].evidences) == 2


class TestModels:
    """Evidence, Violation and ScanResult behaviour."""

    def test_evidence_line_is_one_based(self):
        with pytest.raises(ValueError):
            Evidence(file="A.cs", line=0, snippet="")

    def test_explanation_is_set_once(self):
        violation = Violation(principle=Principle.SRP, evidences=(_evidence(1),))
        explained = violation.with_explanation("split it")
        assert explained.explanation == "split it"
        assert violation.explanation is None
        with pytest.raises(ValueError):
            explained.with_explanation("again")

    def test_violation_text(self):
        violation = Violation(principle=Principle.SRP, evidences=(_evidence(4),))
        assert str(violation) == "Principle: SRP, Files: File: A.cs, Line: 4, Code: class C4 { }"

    def test_principle_full_name(self):
        assert Principle.LSP.full_name == "Liskov Substitution Principle"

    def test_scan_result_summary_and_verdict(self):
        violations = [
            Violation(principle=Principle.SRP, evidences=(_evidence(1), _evidence(2))),
            Violation(principle=Principle.DIP, evidences=(_evidence(3),)),
        ]
        result = ScanResult.build("src", violations, files_scanned=4)
        assert result.summary == {"SRP": 2, "OCP": 0, "LSP": 0, "ISP": 0, "DIP": 1}
        assert result.verdict == "2 principle(s) flagged (SRP, DIP) with 3 finding(s) across 4 file(s)."

    def test_clean_verdict(self):
        result = ScanResult.build("src", [], files_scanned=2)
        assert result.verdict == "No SOLID violations suspected across 2 file(s)."
