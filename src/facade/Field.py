#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Slot import Slot, FConst


class Field(Slot):
    """Plain value reflection - a class constant or an instance field.

    Fields are never writable from the public side. Every get() re-reads
    the current private value, so reassigning the private attribute is
    visible immediately.
    """

    def __init__(self, parent=None, name="", flags=0, member=None):
        super().__init__(parent, name, (flags | FConst.Getter) & ~(FConst.Setter | FConst.Deleter), member)

    def kind(self):
        return "value"

    def is_field(self):
        return True

    def get(self, target=None):
        """Get field value.

        Args:
            target: Private instance (ignored for static fields)

        Returns:
            Current private value
        """
        return getattr(self.receiver(target), self._name)


class Accessor(Slot):
    """Getter/setter pair reflection.

    Wraps a data descriptor (property, __slots__ member, custom
    descriptor) found on the private class, or on its metaclass for
    static accessors.
    """

    def __init__(self, parent=None, name="", flags=0, member=None):
        super().__init__(parent, name, flags | Accessor._descriptor_flags(member), member)

    @staticmethod
    def _descriptor_flags(member):
        if isinstance(member, property):
            flags = 0
            if member.fget is not None:
                flags |= FConst.Getter
            if member.fset is not None:
                flags |= FConst.Setter
            if member.fdel is not None:
                flags |= FConst.Deleter
            return flags

        cls = type(member)
        flags = 0
        if hasattr(cls, "__get__"):
            flags |= FConst.Getter
        if hasattr(cls, "__set__"):
            flags |= FConst.Setter
        if hasattr(cls, "__delete__"):
            flags |= FConst.Deleter
        return flags

    def kind(self):
        return "accessor"

    def is_accessor(self):
        return True

    def get(self, target=None):
        obj = self.receiver(target)
        return self._member.__get__(obj, type(obj))

    def set_(self, target, val):
        self._member.__set__(self.receiver(target), val)

    def delete(self, target=None):
        self._member.__delete__(self.receiver(target))
