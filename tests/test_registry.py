"""
Tests for the identity registry

Covers:
- Weak and strong retention of instance pairs
- Unhashable and equality-overriding private objects
- The shared process-wide registry
- Thread safety of compile and bind
"""

from __future__ import annotations

import gc
import threading
import weakref

import pytest

from facade import (
    AlreadyBoundErr,
    PublicClassBuilder,
    Registry,
    Retention,
    get_public_class,
)


class TestWeakRetention:
    """The registry never keeps a public instance alive."""

    def test_pair_reclaimed_with_public(self, weak_builder, counter_cls) -> None:
        Public = weak_builder.get_public_class(counter_cls)
        registry = weak_builder.registry()
        private = counter_cls()
        public = Public(private)
        private_ref = weakref.ref(private)
        public_ref = weakref.ref(public)

        del public, private
        gc.collect()

        assert public_ref() is None
        assert private_ref() is None
        assert registry.instance_count() == 0

    def test_public_keeps_private_alive(self, weak_builder, counter_cls) -> None:
        public = weak_builder.get_public_class(counter_cls)(5)
        private_ref = weakref.ref(weak_builder.to_private(public))

        gc.collect()

        assert private_ref() is not None
        assert public.count == 5

    def test_rewrap_after_reclaim(self, weak_builder, counter_cls) -> None:
        Public = weak_builder.get_public_class(counter_cls)
        private = counter_cls()
        Public(private)
        gc.collect()

        again = Public(private)

        assert weak_builder.to_public(private) is again

    def test_classes_are_kept(self, weak_builder, counter_cls) -> None:
        first = weak_builder.get_public_class(counter_cls)
        gc.collect()

        assert weak_builder.get_public_class(counter_cls) is first


class TestStrongRetention:
    """Both instances live as long as the registry."""

    def test_pair_survives_dropped_references(self, builder, counter_cls) -> None:
        Public = builder.get_public_class(counter_cls)
        registry = builder.registry()
        private = counter_cls()
        Public(private)
        private_ref = weakref.ref(private)

        del private
        gc.collect()

        assert private_ref() is not None
        assert registry.instance_count() == 1
        assert isinstance(registry.public_instance(private_ref()), Public)

    def test_default_is_strong(self) -> None:
        assert PublicClassBuilder().retention() is Retention.strong()
        assert Registry().retention().is_strong()


class TestIdentityKeys:
    """Lookups use identity, never hashing or equality."""

    def test_unhashable_private_objects(self, builder) -> None:
        class Cell:
            def __init__(self, v):
                self._v = v

            def __eq__(self, other):
                return True

            def value(self):
                return self._v

        Public = builder.get_public_class(Cell)
        a = Cell(1)
        b = Cell(2)

        pa = Public(a)
        pb = Public(b)

        assert pa is not pb
        assert builder.to_public(a) is pa
        assert builder.to_public(b) is pb
        assert pb.value() == 2

    def test_unbound_lookups_return_none(self, builder, counter_cls) -> None:
        registry = builder.registry()

        assert registry.public_instance(counter_cls()) is None
        assert registry.private_instance(object()) is None
        assert registry.public_class(counter_cls) is None


class TestBind:
    """bind_instances() is one-to-one and permanent."""

    def test_private_side_already_bound(self, builder, counter_cls) -> None:
        Public = builder.get_public_class(counter_cls)
        registry = builder.registry()
        private = counter_cls()
        Public(private)

        with pytest.raises(AlreadyBoundErr):
            registry.bind_instances(object.__new__(Public), private)

    def test_public_side_already_bound(self, builder, counter_cls) -> None:
        public = builder.get_public_class(counter_cls)()

        with pytest.raises(AlreadyBoundErr):
            builder.registry().bind_instances(public, counter_cls())

    def test_repr(self, builder, counter_cls) -> None:
        builder.get_public_class(counter_cls)()

        assert repr(builder.registry()) == "Registry(strong, classes=1, instances=1)"


class TestShared:
    """The process-wide registry behind get_public_class()."""

    def test_shared_is_weak_singleton(self, counter_cls) -> None:
        registry = Registry.shared()

        assert registry is Registry.shared()
        assert registry.retention() is Retention.weak()
        assert PublicClassBuilder.shared().registry() is registry
        assert registry.private_class(get_public_class(counter_cls)) is counter_cls

    def test_retention_mismatch_rejected(self) -> None:
        with pytest.raises(ValueError):
            PublicClassBuilder(Retention.strong(), registry=Registry.shared())

    def test_retention_from_str(self) -> None:
        assert Retention.from_str("Weak") is Retention.weak()
        assert Retention.from_str("none", checked=False) is None
        with pytest.raises(ValueError):
            Retention.from_str("none")


class TestConcurrency:
    """Compilation and binding from many threads."""

    def test_concurrent_compile_yields_one_class(self, builder) -> None:
        class Shared:
            def ping(self):
                return "pong"

        barrier = threading.Barrier(8)
        results = []

        def work():
            barrier.wait()
            results.append(builder.get_public_class(Shared))

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert builder.registry().class_count() == 1

    def test_concurrent_translation_wraps_once(self, weak_builder, counter_cls) -> None:
        weak_builder.get_public_class(counter_cls)
        private = counter_cls()
        barrier = threading.Barrier(8)
        results = []

        def work():
            barrier.wait()
            results.append(weak_builder.to_public(private))

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(r is results[0] for r in results)
