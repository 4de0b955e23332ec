#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import functools
import inspect
import typing

from .Err import NotAClassErr
from .Slot import FConst


class Type:
    """Type reflection over a private class.

    Builds the list of exposed slots of a class: the manifest the
    compiler turns into a public class. Members whose name starts with
    the internal marker, dunder members and reserved names are left out.
    """

    # Metaclasses whose own descriptors are never mirrored
    _BUILTIN_METAS = (type, object)

    def __init__(self, cls, marker="_", reserved=()):
        if not inspect.isclass(cls):
            raise NotAClassErr.make(f"{cls!r} has to be a class")
        if not marker:
            raise ValueError("Internal marker must be a non-empty string")
        self._cls = cls
        self._marker = marker
        self._reserved = frozenset(reserved)
        self._reflected = False
        self._slot_list = []
        self._slots_by_name = {}
        self._skipped = []

    def klass(self):
        return self._cls

    def name(self):
        return self._cls.__name__

    def qname(self):
        return f"{self._cls.__module__}.{self._cls.__qualname__}"

    def marker(self):
        return self._marker

    def is_internal(self, name):
        """Return true if name must never appear on the public class."""
        if not isinstance(name, str):
            return True
        if name.startswith("__") and name.endswith("__"):
            return True
        return name.startswith(self._marker)

    def is_reserved(self, name):
        return name in self._reserved

    #########################################################################
    # Reflection
    #########################################################################

    def _reflect(self):
        """Process the class namespace into slots.

        Walks the MRO from the root down so a subclass definition replaces
        the inherited one, then adds the data descriptors of a custom
        metaclass as static accessors.
        """
        if self._reflected:
            return self
        self._reflected = True

        slots = []
        slots_by_name = {}
        name_to_index = {}

        mro = [k for k in reversed(self._cls.__mro__) if k is not object]

        for meta in reversed(type(self._cls).__mro__):
            if meta in Type._BUILTIN_METAS:
                continue
            for name, member in vars(meta).items():
                if self._skip(name):
                    continue
                if inspect.isdatadescriptor(member):
                    self._merge_slot(self._accessor(name, member, FConst.Static),
                                     slots, slots_by_name, name_to_index)

        for klass in mro:
            instance_fields = Type._instance_annotations(klass)
            namespace = vars(klass)

            for name, member in namespace.items():
                if self._skip(name):
                    continue
                slot = self._create_slot(klass, name, member, name in instance_fields)
                self._merge_slot(slot, slots, slots_by_name, name_to_index)

            for name in instance_fields:
                if name in namespace or self._skip(name):
                    continue
                from .Field import Field
                slot = Field(klass, name, FConst.Synthetic, None)
                self._merge_slot(slot, slots, slots_by_name, name_to_index)

        self._slot_list = slots
        self._slots_by_name = slots_by_name
        return self

    def _skip(self, name):
        if self.is_internal(name):
            return True
        if self.is_reserved(name):
            if name not in self._skipped:
                self._skipped.append(name)
            return True
        return False

    def _merge_slot(self, slot, slots, slots_by_name, name_to_index):
        """Merge a slot into the slot lists, handling overrides."""
        name = slot.name()
        existing_idx = name_to_index.get(name)
        slots_by_name[name] = slot
        if existing_idx is not None:
            slots[existing_idx] = slot
        else:
            slots.append(slot)
            name_to_index[name] = len(slots) - 1

    def _accessor(self, name, member, flags=0):
        from .Field import Accessor
        return Accessor(self._cls, name, flags, member)

    def _create_slot(self, klass, name, member, is_instance_field):
        """Classify one class namespace entry."""
        from .Field import Field
        from .Method import Method

        if isinstance(member, (staticmethod, classmethod)):
            return Method(self._cls, name, FConst.Static, member)

        if isinstance(member, functools.cached_property):
            return self._accessor(name, member)

        if inspect.isdatadescriptor(member):
            return self._accessor(name, member)

        if hasattr(type(member), "__get__") and not inspect.isclass(member):
            return Method(self._cls, name, 0, member)

        if is_instance_field:
            return Field(self._cls, name, 0, member)
        return Field(self._cls, name, FConst.Static | FConst.Const, member)

    @staticmethod
    def _instance_annotations(klass):
        """Names annotated on klass as instance fields (ClassVar excluded)."""
        try:
            annotations = inspect.get_annotations(klass)
        except NameError:
            # Unresolvable forward reference; only the names matter here
            annotations = vars(klass).get("__annotations__", {})
        names = []
        for name, ann in annotations.items():
            if Type._is_class_var(ann):
                continue
            names.append(name)
        return names

    @staticmethod
    def _is_class_var(ann):
        if isinstance(ann, str):
            text = ann.strip()
            return text.startswith("ClassVar") or text.startswith("typing.ClassVar")
        return ann is typing.ClassVar or typing.get_origin(ann) is typing.ClassVar

    #########################################################################
    # Slot Lookup
    #########################################################################

    def slots(self):
        """Return all exposed slots."""
        self._reflect()
        return list(self._slot_list)

    def slot(self, name, checked=True):
        self._reflect()
        slot = self._slots_by_name.get(name)
        if slot is not None:
            return slot
        if checked:
            raise AttributeError(f"{self.qname()}.{name}")
        return None

    def fields(self):
        return [s for s in self.slots() if s.is_field()]

    def accessors(self):
        return [s for s in self.slots() if s.is_accessor()]

    def methods(self):
        return [s for s in self.slots() if s.is_method()]

    def static_slots(self):
        return [s for s in self.slots() if s.is_static()]

    def instance_slots(self):
        return [s for s in self.slots() if not s.is_static()]

    def skipped_reserved(self):
        """Exposed names dropped because they collide with reserved names."""
        self._reflect()
        return list(self._skipped)

    def __repr__(self):
        return f"Type({self.qname()})"
