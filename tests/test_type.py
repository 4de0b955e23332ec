"""
Tests for private class reflection

Covers:
- Classification of methods, accessors and values
- Static versus instance level
- Internal marker, dunder and reserved name handling
- Overrides along the MRO
"""

from __future__ import annotations

import functools
from typing import ClassVar

import pytest

from facade import Accessor, Field, FConst, Method, NotAClassErr, Type


class Sample:
    """Class exercising every member kind."""

    VERSION = 3
    size: int = 0
    label: str
    kinds: ClassVar[tuple] = ("a", "b")

    def run(self):
        return "run"

    @staticmethod
    def make():
        return Sample()

    @classmethod
    def named(cls, name):
        return cls()

    @property
    def total(self):
        return 1

    @total.setter
    def total(self, value):
        pass

    @functools.cached_property
    def heavy(self):
        return 42

    def _helper(self):
        pass

    m_secret = "m"

    def __len__(self):
        return 0


class TestClassification:
    """Each namespace entry maps to one slot kind."""

    def test_exposed_names(self) -> None:
        t = Type(Sample)
        names = [s.name() for s in t.slots()]

        assert sorted(names) == sorted([
            "VERSION", "size", "label", "kinds", "run", "make", "named",
            "total", "heavy", "m_secret"])

    def test_methods(self) -> None:
        t = Type(Sample)

        assert isinstance(t.slot("run"), Method)
        assert not t.slot("run").is_static()
        assert t.slot("make").is_static()
        assert t.slot("named").is_static()
        assert {s.name() for s in t.methods()} == {"run", "make", "named"}

    def test_accessors(self) -> None:
        t = Type(Sample)
        total = t.slot("total")
        heavy = t.slot("heavy")

        assert isinstance(total, Accessor)
        assert total.is_readable() and total.is_settable()
        assert not total.is_deletable()
        assert isinstance(heavy, Accessor)
        assert heavy.is_readable() and not heavy.is_settable()

    def test_values(self) -> None:
        t = Type(Sample)

        assert isinstance(t.slot("VERSION"), Field)
        assert t.slot("VERSION").is_static() and t.slot("VERSION").is_const()
        assert t.slot("kinds").is_static()
        assert not t.slot("size").is_static()
        assert not t.slot("label").is_static()
        assert t.slot("label").is_synthetic()
        assert not t.slot("VERSION").is_settable()

    def test_static_and_instance_split(self) -> None:
        t = Type(Sample)

        assert {s.name() for s in t.static_slots()} == {"VERSION", "kinds", "make", "named", "m_secret"}
        assert {s.name() for s in t.instance_slots()} == {"size", "label", "run", "total", "heavy"}

    def test_flags(self) -> None:
        slot = Type(Sample).slot("VERSION")

        assert slot.flags_() & FConst.Static
        assert slot.flags_() & FConst.Getter
        assert slot.kind() == "value"
        assert slot.qname() == "Sample.VERSION"
        assert repr(slot) == "<static value Sample.VERSION>"

    def test_static_value_reads_class(self) -> None:
        assert Type(Sample).slot("VERSION").get() == 3

    def test_method_signature_drops_receiver(self) -> None:
        t = Type(Sample)

        assert list(t.slot("named").signature().parameters) == ["name"]
        assert list(t.slot("run").signature().parameters) == []
        assert list(t.slot("make").signature().parameters) == []


class TestNames:
    """Internal, dunder and reserved names are never exposed."""

    def test_internal_and_dunder_skipped(self) -> None:
        t = Type(Sample)

        assert t.slot("_helper", checked=False) is None
        assert t.slot("__len__", checked=False) is None
        with pytest.raises(AttributeError):
            t.slot("_helper")

    def test_custom_marker(self) -> None:
        t = Type(Sample, marker="m_")
        names = {s.name() for s in t.slots()}

        assert "m_secret" not in names
        assert "_helper" in names
        assert "__len__" not in names
        assert t.is_internal("m_anything")
        assert not t.is_internal("_anything")

    def test_empty_marker_rejected(self) -> None:
        with pytest.raises(ValueError):
            Type(Sample, marker="")

    def test_reserved_names(self) -> None:
        class Lookup:
            def resolve(self):
                return "mine"

            def find(self):
                return "found"

        t = Type(Lookup, reserved=("resolve",))

        assert [s.name() for s in t.slots()] == ["find"]
        assert t.skipped_reserved() == ["resolve"]

    @pytest.mark.parametrize("value", [1, "Sample", Sample()])
    def test_not_a_class(self, value) -> None:
        with pytest.raises(NotAClassErr):
            Type(value)


class TestInheritance:
    """The most-derived definition of a name wins."""

    def test_override_replaces_inherited_slot(self) -> None:
        class Base:
            value = 1

            def greet(self):
                return "base"

        class Child(Base):
            @property
            def value(self):
                return 2

        t = Type(Child)

        assert isinstance(t.slot("value"), Accessor)
        assert t.slot("greet").parent() is Child
        assert [s.name() for s in t.slots()] == ["value", "greet"]

    def test_metaclass_property_is_static_accessor(self) -> None:
        class Meta(type):
            @property
            def registry_size(cls):
                return 0

        class WithMeta(metaclass=Meta):
            pass

        slot = Type(WithMeta).slot("registry_size")

        assert isinstance(slot, Accessor)
        assert slot.is_static()
        assert slot.get() == 0
