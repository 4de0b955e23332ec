#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import threading
import weakref

from .Err import AlreadyBoundErr
from .Log import Log
from .Retention import Retention


class Registry:
    """Bidirectional identity store between private and public objects.

    Holds four maps: private class -> public class, public class ->
    private class, private instance -> public instance and public
    instance -> private instance. Class entries live as long as the
    registry. Instance entries follow the retention policy:

    - weak: the public instance owns its private instance while it is
      alive; both entries are dropped when the public instance is
      reclaimed, so the registry never keeps either side alive
    - strong: both instances are kept for the life of the registry

    Instance maps are keyed by id() and check identity on lookup, so
    unhashable private objects are supported.

    All read-modify-write sequences run under the registry lock.
    """

    _shared = None
    _shared_lock = threading.Lock()

    def __init__(self, retention=None):
        self._retention = retention if retention is not None else Retention.strong()
        self._lock = threading.RLock()
        self._public_classes = {}    # private class -> public class
        self._private_classes = {}   # public class -> private class
        self._public_instances = {}  # id(private) -> (private, public or ref)
        self._private_instances = {}  # id(public) -> (public or ref, private)
        self._translator = None
        self._log = Log.get("facade")

    @staticmethod
    def shared():
        """Process-wide registry with weak retention."""
        if Registry._shared is None:
            with Registry._shared_lock:
                if Registry._shared is None:
                    Registry._shared = Registry(Retention.weak())
        return Registry._shared

    def retention(self):
        return self._retention

    def lock(self):
        """Re-entrant lock guarding every map of this registry."""
        return self._lock

    def translator(self):
        """Value translator working against this registry."""
        if self._translator is None:
            from .Translator import Translator
            self._translator = Translator(self)
        return self._translator

    #########################################################################
    # Classes
    #########################################################################

    def public_class(self, private_cls):
        """Return the public class compiled for private_cls or None."""
        with self._lock:
            return self._public_classes.get(private_cls)

    def private_class(self, public_cls):
        """Return the private class behind public_cls or None."""
        with self._lock:
            return self._private_classes.get(public_cls)

    def is_public_class(self, obj):
        with self._lock:
            return obj in self._private_classes

    def bind_classes(self, private_cls, public_cls):
        with self._lock:
            self._public_classes[private_cls] = public_cls
            self._private_classes[public_cls] = private_cls

    def public_class_for(self, private_instance):
        """Nearest compiled public class for an instance's class MRO."""
        with self._lock:
            if not self._public_classes:
                return None
            for klass in type(private_instance).__mro__:
                public_cls = self._public_classes.get(klass)
                if public_cls is not None:
                    return public_cls
        return None

    def class_count(self):
        with self._lock:
            return len(self._public_classes)

    #########################################################################
    # Instances
    #########################################################################

    def public_instance(self, private_instance):
        """Return the public instance bound to private_instance or None."""
        with self._lock:
            entry = self._public_instances.get(id(private_instance))
        if entry is None or entry[0] is not private_instance:
            return None
        public = entry[1]
        if isinstance(public, weakref.ref):
            public = public()
        return public

    def private_instance(self, public_instance):
        """Return the private instance bound to public_instance or None."""
        with self._lock:
            entry = self._private_instances.get(id(public_instance))
        if entry is None:
            return None
        key = entry[0]
        if isinstance(key, weakref.ref):
            key = key()
        if key is not public_instance:
            return None
        return entry[1]

    def is_bound(self, public_instance):
        return self.private_instance(public_instance) is not None

    def bind_instances(self, public_instance, private_instance):
        """Permanently associate a public and a private instance.

        Raises AlreadyBoundErr if either side is already bound.
        """
        with self._lock:
            if self.public_instance(private_instance) is not None:
                raise AlreadyBoundErr.make(
                    f"{type(public_instance).__name__}(private_instance) -> "
                    f"private instance already has an associated public instance")
            if self.private_instance(public_instance) is not None:
                raise AlreadyBoundErr.make(
                    f"{type(public_instance).__name__} instance is already bound")

            public_id = id(public_instance)
            private_id = id(private_instance)

            if self._retention.is_weak():
                ref = weakref.ref(public_instance, self._dropper(public_id, private_id))
                self._private_instances[public_id] = (ref, private_instance)
                self._public_instances[private_id] = (private_instance, ref)
            else:
                self._private_instances[public_id] = (public_instance, private_instance)
                self._public_instances[private_id] = (private_instance, public_instance)

        if self._log.is_debug():
            self._log.debug(f"bound {type(public_instance).__qualname__} to {type(private_instance).__qualname__}")

    def _dropper(self, public_id, private_id):
        """Weakref callback removing both entries of a reclaimed public instance."""
        def drop(ref):
            with self._lock:
                entry = self._private_instances.get(public_id)
                if entry is not None and entry[0] is ref:
                    del self._private_instances[public_id]
                entry = self._public_instances.get(private_id)
                if entry is not None and entry[1] is ref:
                    del self._public_instances[private_id]
        return drop

    def instance_count(self):
        with self._lock:
            return len(self._private_instances)

    def __repr__(self):
        return f"Registry({self._retention}, classes={self.class_count()}, instances={self.instance_count()})"
