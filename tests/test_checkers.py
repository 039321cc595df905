"""
Tests for the five principle checkers.

Each checker is exercised in isolation on parsed declarations, then through
run() against a ViolationStore.
"""

import pytest

from solidify.checkers import (
    DIPChecker,
    ISPChecker,
    LSPChecker,
    OCPChecker,
    SRPChecker,
    ViolationStore,
)
from solidify.models import Principle


def _methods(*names: str, body: str = "{ }") -> str:
    return "\n".join(f"    public void {n}() {body}" for n in names)


# =============================================================================
# SRP
# =============================================================================


class TestSRP:
    """Responsibility categories and size limits."""

    @pytest.fixture
    def checker(self):
        return SRPChecker()

    def test_more_than_ten_methods(self, checker, declaration):
        names = [f"Run{i}" for i in range(11)]
        decl, unit = declaration(f"class Big\n{{\n{_methods(*names)}\n}}", "Big")
        assert checker.detect(decl, unit)

    def test_ten_methods_of_one_category_pass(self, checker, declaration):
        names = [f"Run{i}" for i in range(10)]
        decl, unit = declaration(f"class Busy\n{{\n{_methods(*names)}\n}}", "Busy")
        assert checker.responsibilities(decl) == {"Other"}
        assert not checker.detect(decl, unit)

    def test_single_category_passes(self, checker, declaration):
        decl, unit = declaration(
            "class Calc { int Calculate() { return 1; } int ComputeSum() { return 2; } }", "Calc"
        )
        assert checker.responsibilities(decl) == {"Calculation"}
        assert not checker.detect(decl, unit)

    def test_two_categories(self, checker, declaration):
        decl, unit = declaration("class Mixed { void CalculateTotal() { } void SaveOrder() { } }", "Mixed")
        assert checker.responsibilities(decl) == {"Calculation", "DataAccess"}
        assert checker.detect(decl, unit)

    def test_first_matching_rule_wins(self, checker, declaration):
        # "LoadAndValidate" is DataAccess, never Validation
        decl, _ = declaration("class A { void LoadAndValidate() { } void FetchAll() { } }", "A")
        assert checker.responsibilities(decl) == {"DataAccess"}

    def test_name_match_is_case_insensitive(self, checker, declaration):
        decl, _ = declaration("class A { void recalculate() { } void FORMAT() { } }", "A")
        assert checker.responsibilities(decl) == {"Calculation", "Formatting"}

    def test_logging_receiver_in_block_body(self, checker, declaration):
        decl, unit = declaration(
            "class A { void Run() { Console.WriteLine(1); } void Go() { } }", "A"
        )
        assert checker.responsibilities(decl) == {"Logging", "Other"}
        assert checker.detect(decl, unit)

    def test_expression_body_is_not_inspected(self, checker, declaration):
        decl, unit = declaration("class A { void Run() => Console.WriteLine(1); void Go() { } }", "A")
        assert not checker.detect(decl, unit)

    def test_public_property_adds_data_management(self, checker, declaration):
        decl, unit = declaration("class A { public int X { get; set; } void Go() { } }", "A")
        assert checker.responsibilities(decl) == {"Other", "DataManagement"}
        assert checker.detect(decl, unit)

    def test_private_property_adds_nothing(self, checker, declaration):
        decl, unit = declaration("class A { private int X { get; set; } void Go() { } }", "A")
        assert not checker.detect(decl, unit)

    def test_more_than_ten_properties(self, checker, declaration):
        props = "\n".join(f"    int P{i} {{ get; set; }}" for i in range(11))
        decl, unit = declaration(f"class Bag\n{{\n{props}\n}}", "Bag")
        assert checker.detect(decl, unit)

    def test_constructors_do_not_count(self, checker, declaration):
        names = [f"Run{i}" for i in range(10)]
        decl, unit = declaration(f"class C\n{{\n    public C() {{ }}\n{_methods(*names)}\n}}", "C")
        assert len(decl.methods) == 10
        assert not checker.detect(decl, unit)

    def test_thresholds_are_configurable(self, declaration):
        decl, unit = declaration(f"class A\n{{\n{_methods('A1', 'A2', 'A3')}\n}}", "A")
        assert SRPChecker(max_methods=2).detect(decl, unit)

    def test_interfaces_are_ignored(self, checker, parse):
        unit = parse("interface IMixed { void CalculateTotal(); void SaveOrder(); }")
        assert checker.check(unit.declarations[0], unit) == []


# =============================================================================
# OCP
# =============================================================================


class TestOCP:
    """Open for extension, closed for modification."""

    @pytest.fixture
    def checker(self):
        return OCPChecker()

    def test_trivial_class_is_flagged(self, checker, declaration):
        decl, unit = declaration("class Empty { }", "Empty")
        assert not checker.is_open(decl)
        assert checker.is_closed(decl)
        assert checker.detect(decl, unit)

    @pytest.mark.parametrize("source", [
        "class A { public virtual double Area() { return 0; } }",
        "abstract class A { protected abstract void Draw(); }",
        "class A : IShape { }",
        "static class A { public static int Twice(this int x) => x * 2; }",
        "class A { private readonly ILogger _log; }",
    ])
    def test_open_and_closed_passes(self, checker, declaration, source):
        decl, unit = declaration(source, "A")
        assert checker.is_open(decl)
        assert not checker.detect(decl, unit)

    def test_field_of_generic_type_does_not_open(self, checker, declaration):
        decl, unit = declaration("class A { private readonly List<int> _items; }", "A")
        assert not checker.is_open(decl)
        assert checker.detect(decl, unit)

    def test_public_mutable_field_breaks_closed(self, checker, declaration):
        decl, unit = declaration("class A : IAccount { public int Balance; }", "A")
        assert not checker.is_closed(decl)
        assert checker.detect(decl, unit)

    def test_public_readonly_field_is_fine(self, checker, declaration):
        decl, unit = declaration("class A : IAccount { public readonly int Id; }", "A")
        assert not checker.detect(decl, unit)

    def test_sealed_overrides_setters_and_fields(self, checker, declaration):
        source = "{} class A : IPerson {{ private int _age; public string Name {{ get; set; }} }}"
        decl, unit = declaration(source.format(""), "A")
        assert checker.detect(decl, unit)
        decl, unit = declaration(source.format("sealed"), "A")
        assert not checker.detect(decl, unit)

    def test_private_setters_close_the_class(self, checker, declaration):
        decl, unit = declaration(
            "class A : IPerson { private int _age; public string Name { get; private set; } }", "A"
        )
        assert checker.is_closed(decl)

    def test_get_only_property_is_not_a_private_setter(self, checker, declaration):
        decl, unit = declaration("class A : IP { public int X { get; } private int _y; }", "A")
        assert not checker.is_closed(decl)

    def test_property_without_accessor_list_counts_as_private(self, checker, declaration):
        decl, unit = declaration("class A : IP { public int X => 1; private int _y; }", "A")
        assert checker.is_closed(decl)
        assert not checker.detect(decl, unit)


# =============================================================================
# LSP
# =============================================================================


class TestLSP:
    """Derived classes must override every base method with compatible types."""

    @pytest.fixture
    def checker(self):
        return LSPChecker()

    def test_missing_override(self, checker, declaration):
        decl, unit = declaration(
            "class Animal { public virtual string Speak() { return \"\"; } }\n"
            "class Dog : Animal { public string Speak() { return \"Woof\"; } }\n",
            "Dog",
        )
        assert checker.evaluate(decl, unit) is False
        assert checker.detect(decl, unit)

    def test_faithful_override(self, checker, declaration):
        decl, unit = declaration(
            "class Animal { public virtual string Speak(int times) { return \"\"; } }\n"
            "class Dog : Animal { public override string Speak(int times) { return \"Woof\"; } }\n",
            "Dog",
        )
        assert checker.evaluate(decl, unit) is True

    def test_private_base_methods_need_overrides_too(self, checker, declaration):
        decl, unit = declaration(
            "class Animal { public virtual void Speak() { } private void Helper() { } }\n"
            "class Dog : Animal { public override void Speak() { } }\n",
            "Dog",
        )
        assert checker.detect(decl, unit)

    def test_parameter_types_must_match_exactly(self, checker, declaration):
        decl, unit = declaration(
            "class Animal { public virtual void Eat(int amount) { } }\n"
            "class Dog : Animal { public override void Eat(long amount) { } }\n",
            "Dog",
        )
        assert checker.detect(decl, unit)

    def test_unresolved_base_is_skipped(self, checker, declaration):
        decl, unit = declaration("class Dog : Animal { public void Bark() { } }", "Dog")
        assert checker.evaluate(decl, unit) is None
        assert not checker.detect(decl, unit)

    def test_only_first_base_is_considered(self, checker, declaration):
        decl, unit = declaration(
            "class Animal { public virtual void Speak() { } }\n"
            "class Dog : IPet, Animal { }\n",
            "Dog",
        )
        assert checker.evaluate(decl, unit) is None

    def test_covariant_return_is_compliant(self, checker, declaration):
        decl, unit = declaration(
            "class Food { }\n"
            "class Meat : Food { }\n"
            "class Animal { public virtual Food Eat() { return null; } }\n"
            "class Dog : Animal { public override Meat Eat() { return null; } }\n",
            "Dog",
        )
        assert checker.evaluate(decl, unit) is True

    def test_widened_return_is_a_violation(self, checker, declaration):
        decl, unit = declaration(
            "class Food { }\n"
            "class Meat : Food { }\n"
            "class Animal { public virtual Meat Eat() { return null; } }\n"
            "class Dog : Animal { public override Food Eat() { return null; } }\n",
            "Dog",
        )
        assert checker.detect(decl, unit)

    def test_resolution_gap_skips_the_class(self, checker, declaration):
        decl, unit = declaration(
            "class Animal { public virtual List<int> Ids() { return null; } }\n"
            "class Dog : Animal { public override IEnumerable<int> Ids() { return null; } }\n",
            "Dog",
        )
        assert checker.evaluate(decl, unit) is None

    def test_structural_miss_wins_over_resolution_gap(self, checker, declaration):
        decl, unit = declaration(
            "class Animal { public virtual List<int> Ids() { return null; } public virtual void Run() { } }\n"
            "class Dog : Animal { public override IEnumerable<int> Ids() { return null; } }\n",
            "Dog",
        )
        assert checker.evaluate(decl, unit) is False

    def test_evidence_points_at_derived_declaration(self, checker, parse):
        unit = parse(
            "class Animal { public virtual void Speak() { } }\n"
            "\n"
            "class Dog : Animal { }\n"
        )
        store = ViolationStore()
        assert checker.run(unit, store) == 1
        evidence = store.violations()[0].evidences[0]
        assert evidence.line == 3
        assert evidence.snippet == "class Dog : Animal { }"


# =============================================================================
# ISP
# =============================================================================


def _interface(*methods: str, extra: str = "") -> str:
    body = " ".join(f"void {m}();" for m in methods)
    return f"interface IWide {{ {body} {extra} }}"


class TestISP:
    """Interface width and purpose."""

    @pytest.fixture
    def checker(self):
        return ISPChecker()

    def test_seven_members_pass(self, checker, declaration):
        decl, unit = declaration(_interface(*[f"Get{c}" for c in "ABCDEFG"]), "IWide")
        assert checker.member_count(decl) == 7
        assert not checker.detect(decl, unit)

    def test_eight_members_fail(self, checker, declaration):
        decl, unit = declaration(_interface(*[f"Get{c}" for c in "ABCDEFGH"]), "IWide")
        assert checker.detect(decl, unit)

    def test_properties_and_events_count(self, checker, declaration):
        source = _interface(
            "GetA", "GetB", "GetC", "GetD", "GetE",
            extra="int Size { get; } string Name { get; } event EventHandler Changed;",
        )
        decl, unit = declaration(source, "IWide")
        assert checker.member_count(decl) == 8
        assert checker.detect(decl, unit)

    def test_three_categories_fail(self, checker, declaration):
        decl, unit = declaration(_interface("GetName", "CalculateTax", "SaveAll"), "IWide")
        assert checker.categories(decl) == {"Accessor", "Calculation", "Persistence"}
        assert checker.detect(decl, unit)

    def test_two_categories_pass(self, checker, declaration):
        decl, unit = declaration(_interface("GetName", "DeleteAll", "IsReady"), "IWide")
        assert not checker.detect(decl, unit)

    def test_prefixes_are_case_sensitive(self, checker, declaration):
        decl, unit = declaration(_interface("getName", "calculate", "save"), "IWide")
        assert checker.categories(decl) == {"Other"}

    def test_classes_are_ignored(self, checker, parse):
        unit = parse(f"class Wide {{ {' '.join(f'void Get{c}() {{ }}' for c in 'ABCDEFGH')} }}")
        assert checker.check(unit.declarations[0], unit) == []


# =============================================================================
# DIP
# =============================================================================


class TestDIP:
    """Dependencies must be primitives or simple named types."""

    @pytest.fixture
    def checker(self):
        return DIPChecker()

    @pytest.mark.parametrize("source", [
        "class A { private ILogger _logger; }",
        "class A { private FileLogger _logger; public string Name { get; set; } }",
        "class A { void Run(int count, IClock clock) { } }",
        "class A { public A(List<int> items) { } }",
        "class A { }",
    ])
    def test_bare_and_predefined_types_pass(self, checker, declaration, source):
        decl, unit = declaration(source, "A")
        assert not checker.detect(decl, unit)

    @pytest.mark.parametrize("source", [
        "class A { private List<string> _items; }",
        "class A { private System.IO.Stream _stream; }",
        "class A { private int? _maybe; }",
        "class A { public int[] Values { get; set; } }",
        "class A { void Run(Dictionary<string, int> map) { } }",
        "class A { private (int, int) _pair; }",
    ])
    def test_composite_types_fail(self, checker, declaration, source):
        decl, unit = declaration(source, "A")
        assert checker.detect(decl, unit)


# =============================================================================
# STORE INTEGRATION
# =============================================================================


class TestRun:
    """run() files one evidence per offending declaration, in source order."""

    def test_evidence_in_source_order(self, parse):
        unit = parse(
            "class First { void CalculateA() { } void SaveA() { } }\n"
            "class Clean { void Go() { } }\n"
            "class Second { void CalculateB() { } void SaveB() { } }\n"
        )
        store = ViolationStore()
        assert SRPChecker().run(unit, store) == 2
        [violation] = store.violations()
        assert violation.principle == Principle.SRP
        assert [e.line for e in violation.evidences] == [1, 3]

    def test_nothing_flagged_creates_no_violation(self, parse):
        store = ViolationStore()
        ISPChecker().run(parse("interface ISmall { void GetA(); }"), store)
        assert len(store) == 0
        assert Principle.ISP not in store
