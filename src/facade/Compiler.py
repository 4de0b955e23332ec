#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect

from .Config import Config
from .Err import ReadonlyErr
from .Log import Log
from .PublicObj import PublicObj, PublicType
from .Type import Type


class InstanceMember:
    """Instance-level accessor or value on a public class.

    Reads go through the bound private instance and are translated to
    public; writes are translated to private. An unbound public object
    reads None and ignores writes.

    Read through the public class itself (PublicCls.name) the member
    returns this descriptor, not None, as property and other Python
    descriptors do.
    """

    def __init__(self, slot, registry):
        self._slot = slot
        self._registry = registry
        self.__doc__ = InstanceMember._doc(slot)

    @staticmethod
    def _doc(slot):
        member = slot.member()
        fget = getattr(member, "fget", None) or getattr(member, "func", None)
        return getattr(fget, "__doc__", None)

    def slot(self):
        return self._slot

    def __get__(self, obj, owner=None):
        if obj is None:
            return self
        private = self._registry.private_instance(obj)
        if private is None:
            return None
        translator = self._registry.translator()
        return translator.to_public(self._slot.get(private))

    def __set__(self, obj, value):
        if not self._slot.is_settable():
            raise ReadonlyErr.make(f"{self._slot.qname()} is read-only")
        private = self._registry.private_instance(obj)
        if private is None:
            return
        translator = self._registry.translator()
        self._slot.set_(private, translator.to_private(value))

    def __delete__(self, obj):
        if not self._slot.is_deletable():
            raise ReadonlyErr.make(f"{self._slot.qname()} is read-only")
        private = self._registry.private_instance(obj)
        if private is None:
            return
        self._slot.delete(private)

    def __repr__(self):
        return f"<public {self._slot.kind()} {self._slot.qname()}>"


class StaticMember:
    """Class-level accessor or value on a public class.

    Every read re-reads the private class, so the value is never a stale
    copy taken at compile time.
    """

    def __init__(self, slot, registry):
        self._slot = slot
        self._registry = registry
        self.__doc__ = InstanceMember._doc(slot) if slot.is_accessor() else None

    def slot(self):
        return self._slot

    def __get__(self, obj, owner=None):
        return self._registry.translator().to_public(self._slot.get())

    def __set__(self, obj, value):
        self.set_class(value)

    def __delete__(self, obj):
        self.delete_class()

    def set_class(self, value):
        if not self._slot.is_settable():
            raise ReadonlyErr.make(f"{self._slot.qname()} is read-only")
        self._slot.set_(None, self._registry.translator().to_private(value))

    def delete_class(self):
        if not self._slot.is_deletable():
            raise ReadonlyErr.make(f"{self._slot.qname()} is read-only")
        self._slot.delete(None)

    def __repr__(self):
        return f"<public static {self._slot.kind()} {self._slot.qname()}>"


class Compiler:
    """Synthesizes public classes from private classes.

    One compiler is bound to one registry. compile() is memoized in the
    registry: the same private class always yields the same public class.
    """

    # Names owned by the public class protocol itself
    RESERVED = ("resolve",)

    def __init__(self, registry, marker=None):
        self._registry = registry
        self._marker = marker if marker is not None else Config.cur().marker()
        self._log = Log.get("facade")

    def registry(self):
        return self._registry

    def marker(self):
        return self._marker

    def compile(self, private_cls):
        """Return the public class for private_cls.

        Raises NotAClassErr if private_cls is not a class.
        """
        if isinstance(private_cls, PublicType):
            return private_cls

        t = Type(private_cls, self._marker, Compiler.RESERVED)

        with self._registry.lock():
            public_cls = self._registry.public_class(private_cls)
            if public_cls is not None:
                return public_cls

            public_cls = self._build(t)
            self._registry.bind_classes(private_cls, public_cls)

        for name in t.skipped_reserved():
            self._log.warn(f"{t.qname()}.{name} collides with a reserved public name and is not exposed")
        if self._log.is_debug():
            self._log.debug(f"compiled public class {t.qname()} with {len(t.slots())} slots")
        return public_cls

    def _build(self, t):
        private_cls = t.klass()
        namespace = {
            "__slots__": (),
            "__module__": private_cls.__module__,
            "__qualname__": private_cls.__qualname__,
            "__doc__": private_cls.__doc__,
            "__facade_registry__": self._registry,
        }

        try:
            namespace["__signature__"] = inspect.signature(private_cls)
        except (ValueError, TypeError):
            pass

        for slot in t.slots():
            namespace[slot.name()] = self._member(slot)

        return PublicType(private_cls.__name__, (PublicObj,), namespace)

    def _member(self, slot):
        if slot.is_method():
            if slot.is_static():
                return staticmethod(self._static_method(slot))
            return self._instance_method(slot)
        if slot.is_static():
            return StaticMember(slot, self._registry)
        return InstanceMember(slot, self._registry)

    def _static_method(self, slot):
        registry = self._registry

        def method(*args, **kwargs):
            translator = registry.translator()
            private_args, private_kwargs = translator.to_private_args(args, kwargs)
            return translator.to_public(slot.call_on(None, private_args, private_kwargs))

        return Compiler._describe(method, slot, slot.signature())

    def _instance_method(self, slot):
        registry = self._registry

        def method(self, *args, **kwargs):
            private = registry.private_instance(self)
            if private is None:
                return None
            translator = registry.translator()
            private_args, private_kwargs = translator.to_private_args(args, kwargs)
            return translator.to_public(slot.call_on(private, private_args, private_kwargs))

        sig = slot.signature()
        if sig is not None:
            receiver = inspect.Parameter("self", inspect.Parameter.POSITIONAL_ONLY)
            sig = sig.replace(parameters=[receiver] + list(sig.parameters.values()))
        return Compiler._describe(method, slot, sig)

    @staticmethod
    def _describe(func, slot, sig):
        """Copy name, doc and signature; never link back to private code."""
        func.__name__ = slot.name()
        func.__qualname__ = f"{slot.parent().__qualname__}.{slot.name()}"
        func.__module__ = slot.parent().__module__
        func.__doc__ = slot.doc()
        if sig is not None:
            func.__signature__ = sig
        return func
