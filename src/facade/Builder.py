#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect
import threading

from .Compiler import Compiler
from .PublicObj import PublicType
from .Registry import Registry
from .Retention import Retention


class PublicClassBuilder:
    """Builds public classes into one registry.

    A builder created directly owns an isolated registry, strong by
    default: every public/private instance pair it binds lives as long
    as the builder. PublicClassBuilder.shared() is the process-wide
    builder backing get_public_class(), with weak retention.

    Usage:
        builder = PublicClassBuilder()
        Counter = builder.get_public_class(_Counter)
        c = Counter.create()
    """

    _shared = None
    _shared_lock = threading.Lock()

    def __init__(self, retention=None, marker=None, registry=None):
        if registry is None:
            registry = Registry(retention if retention is not None else Retention.strong())
        elif retention is not None and retention != registry.retention():
            raise ValueError(f"Registry retention is {registry.retention()}, not {retention}")
        self._registry = registry
        self._compiler = Compiler(registry, marker)

    @staticmethod
    def shared():
        """Builder over the process-wide weak registry."""
        if PublicClassBuilder._shared is None:
            with PublicClassBuilder._shared_lock:
                if PublicClassBuilder._shared is None:
                    PublicClassBuilder._shared = PublicClassBuilder(registry=Registry.shared())
        return PublicClassBuilder._shared

    def registry(self):
        return self._registry

    def retention(self):
        return self._registry.retention()

    def marker(self):
        return self._compiler.marker()

    def get_public_class(self, private_cls):
        """Return the public class for private_cls, compiling it once."""
        return self._compiler.compile(private_cls)

    def to_public(self, value):
        return self._registry.translator().to_public(value)

    def to_private(self, value):
        return self._registry.translator().to_private(value)

    def __repr__(self):
        return f"PublicClassBuilder({self._registry!r})"


def get_public_class(private_cls):
    """Builds a public class by removing internal members of private_cls.

    Uses the process-wide registry, so repeated calls return the same
    public class.
    """
    return PublicClassBuilder.shared().get_public_class(private_cls)


def is_public_class(obj):
    """Return true if obj is a compiled public class."""
    return inspect.isclass(obj) and isinstance(obj, PublicType) and obj.__facade_registry__ is not None
