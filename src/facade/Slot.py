#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#


class FConst:
    """Slot flag constants."""
    Static = 0x00000800
    Const = 0x00002000
    Getter = 0x00010000
    Setter = 0x00020000
    Deleter = 0x00040000
    Synthetic = 0x00100000


class Slot:
    """Base class for Field, Accessor and Method reflection.

    A slot describes one exposed member of a private class: its name,
    its declaring class, whether it lives on the class (static) or on
    instances, and which operations the public side may perform on it.
    """

    def __init__(self, parent=None, name="", flags=0, member=None):
        self._parent = parent
        self._name = name
        self._flags = flags
        self._member = member

    def parent(self):
        """Get declaring class."""
        return self._parent

    def name(self):
        """Get slot name."""
        return self._name

    def flags_(self):
        """Get raw flags value."""
        return self._flags

    def member(self):
        """Get the raw member object as found in the class namespace."""
        return self._member

    def qname(self):
        """Get qualified name (Class.slotName)."""
        if self._parent is not None:
            return f"{self._parent.__qualname__}.{self._name}"
        return self._name

    def kind(self):
        """Return 'value', 'accessor' or 'method'."""
        raise NotImplementedError("Slot.kind must be overridden by subclass")

    def is_field(self):
        return False

    def is_accessor(self):
        return False

    def is_method(self):
        return False

    def is_static(self):
        return (self._flags & FConst.Static) != 0

    def is_const(self):
        return (self._flags & FConst.Const) != 0

    def is_synthetic(self):
        """Return true if declared only by an annotation."""
        return (self._flags & FConst.Synthetic) != 0

    def is_readable(self):
        return (self._flags & FConst.Getter) != 0

    def is_settable(self):
        return (self._flags & FConst.Setter) != 0

    def is_deletable(self):
        return (self._flags & FConst.Deleter) != 0

    def receiver(self, target=None):
        """Object the private member is invoked on."""
        return self._parent if self.is_static() else target

    def __repr__(self):
        level = "static " if self.is_static() else ""
        return f"<{level}{self.kind()} {self.qname()}>"
