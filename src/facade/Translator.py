#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import asyncio
import concurrent.futures
import inspect

from .ValueKind import ValueKind


class Translator:
    """Recursive rewriter of values crossing the public/private boundary.

    to_public() maps private objects to their public counterparts,
    to_private() does the inverse. Lists and tuples are rebuilt
    element-wise, pending results are chained so their resolution value
    gets translated once it arrives. Anything without a counterpart is
    returned unchanged; translation never raises for unknown values.
    """

    _SCALARS = frozenset((bool, int, float, complex, str, bytes))

    def __init__(self, registry):
        self._registry = registry

    def registry(self):
        return self._registry

    #########################################################################
    # Classification
    #########################################################################

    def kind_of(self, value, public):
        """Classify value for translation in the given direction."""
        reg = self._registry
        if value is None or type(value) in Translator._SCALARS:
            return ValueKind.scalar()

        if isinstance(value, type):
            if public:
                counterpart = reg.public_class(value)
            else:
                counterpart = reg.private_class(value)
            return ValueKind.klass() if counterpart is not None else ValueKind.scalar()

        if public:
            if reg.public_instance(value) is not None or reg.public_class_for(value) is not None:
                return ValueKind.entity()
        elif reg.private_instance(value) is not None:
            return ValueKind.entity()

        if isinstance(value, (list, tuple)):
            return ValueKind.sequence()

        if Translator.is_pending(value):
            return ValueKind.pending()

        return ValueKind.scalar()

    @staticmethod
    def is_pending(value):
        if isinstance(value, (asyncio.Future, concurrent.futures.Future)):
            return True
        return inspect.isawaitable(value)

    #########################################################################
    # Translation
    #########################################################################

    def to_public(self, value):
        """Translate a private value for a public caller."""
        return self._translate(value, True)

    def to_private(self, value):
        """Translate a public value for private code."""
        return self._translate(value, False)

    def to_public_args(self, args, kwargs):
        return self._translate_args(args, kwargs, True)

    def to_private_args(self, args, kwargs):
        return self._translate_args(args, kwargs, False)

    def _translate_args(self, args, kwargs, public):
        args = tuple(self._translate(a, public) for a in args)
        kwargs = {k: self._translate(v, public) for k, v in kwargs.items()}
        return args, kwargs

    def _translate(self, value, public, memo=None):
        kind = self.kind_of(value, public)

        if kind is ValueKind.scalar():
            return value

        if kind is ValueKind.entity():
            return self._entity(value, public)

        if kind is ValueKind.klass():
            reg = self._registry
            return reg.public_class(value) if public else reg.private_class(value)

        if kind is ValueKind.sequence():
            return self._sequence(value, public, {} if memo is None else memo)

        return self._pending(value, public)

    def _entity(self, value, public):
        reg = self._registry
        if not public:
            return reg.private_instance(value)
        existing = reg.public_instance(value)
        if existing is not None:
            return existing
        # Unbound instance of a compiled private class; wrap on demand
        return reg.public_class_for(value).resolve(value)

    def _sequence(self, value, public, memo):
        """Rebuild a list or tuple; memo maps id(source) to its rebuilt copy.

        A list is entered into memo before its elements are translated, so
        self-referencing lists come out with the same shape. Every cycle
        passes through a list since tuples cannot contain themselves.
        """
        done = memo.get(id(value))
        if done is not None:
            return done

        if isinstance(value, list):
            result = Translator._empty_list(value)
            memo[id(value)] = result
            result.extend([self._translate(item, public, memo) for item in value])
            return result

        items = [self._translate(item, public, memo) for item in value]
        if hasattr(value, "_make"):
            result = type(value)._make(items)
        elif type(value) is tuple:
            result = tuple(items)
        else:
            result = Translator._rebuild(value, items)
        memo[id(value)] = result
        return result

    @staticmethod
    def _empty_list(value):
        if type(value) is list:
            return []
        try:
            return type(value)()
        except TypeError:
            return []

    @staticmethod
    def _rebuild(value, items):
        try:
            return type(value)(items)
        except TypeError:
            return tuple(items)

    def _pending(self, value, public):
        if isinstance(value, asyncio.Future):
            return self._chain_asyncio(value, public)
        if isinstance(value, concurrent.futures.Future):
            return self._chain_concurrent(value, public)
        return self._chain_awaitable(value, public)

    def _chain_asyncio(self, source, public):
        loop = source.get_loop()
        target = loop.create_future()

        def done(f):
            if target.done():
                return
            if f.cancelled():
                target.cancel()
                return
            err = f.exception()
            if err is not None:
                target.set_exception(err)
                return
            target.set_result(self._translate(f.result(), public))

        source.add_done_callback(done)
        return target

    def _chain_concurrent(self, source, public):
        target = concurrent.futures.Future()

        def done(f):
            if f.cancelled():
                target.cancel()
                return
            # False once the consumer has cancelled the derived future
            if not target.set_running_or_notify_cancel():
                return
            err = f.exception()
            if err is not None:
                target.set_exception(err)
                return
            target.set_result(self._translate(f.result(), public))

        source.add_done_callback(done)
        return target

    def _chain_awaitable(self, source, public):
        async def translated():
            return self._translate(await source, public)
        return translated()
