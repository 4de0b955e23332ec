#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect

from .Slot import Slot


class Method(Slot):
    """Method reflection - a callable member of a private class.

    Static methods are staticmethod and classmethod objects; a classmethod
    stays bound to the private class. Everything else is bound to the
    private instance at call time through the descriptor protocol.
    """

    def __init__(self, parent=None, name="", flags=0, member=None):
        super().__init__(parent, name, flags, member)
        self._signature = None
        self._signature_done = False

    def kind(self):
        return "method"

    def is_method(self):
        return True

    def func(self):
        """Underlying function, unwrapped from staticmethod/classmethod."""
        return getattr(self._member, "__func__", self._member)

    def bind(self, target=None):
        """Return the private callable bound to its receiver."""
        if self.is_static():
            return self._member.__get__(None, self._parent)
        if hasattr(type(self._member), "__get__"):
            return self._member.__get__(target, type(target))
        return self._member

    def call_on(self, target, args=None, kwargs=None):
        """Call method on a specific target object.

        Args:
            target: Private instance (None for static methods)
            args: Positional arguments
            kwargs: Keyword arguments
        """
        return self.bind(target)(*(args or ()), **(kwargs or {}))

    def doc(self):
        return getattr(self.func(), "__doc__", None)

    def signature(self):
        """Public signature without the receiver parameter, or None."""
        if self._signature_done:
            return self._signature
        self._signature_done = True
        try:
            sig = inspect.signature(self.func())
        except (ValueError, TypeError):
            return None

        params = list(sig.parameters.values())
        drop_first = not isinstance(self._member, staticmethod)
        if drop_first and params and params[0].kind in (
                inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            params = params[1:]
        self._signature = sig.replace(parameters=params)
        return self._signature
