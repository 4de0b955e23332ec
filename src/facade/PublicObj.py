#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Err import AlreadyBoundErr, ReadonlyErr, UnrelatedInstanceErr


class PublicType(type):
    """Metaclass of every public class.

    Public classes are closed: the only class attributes that accept
    assignment or deletion are static accessors mirrored from a private
    setter/deleter, and dunder names.
    """

    def __setattr__(cls, name, value):
        member = _static_member(cls, name)
        if member is not None:
            member.set_class(value)
            return
        if name.startswith("__") and name.endswith("__"):
            type.__setattr__(cls, name, value)
            return
        raise ReadonlyErr.make(f"{cls.__qualname__}.{name} is read-only")

    def __delattr__(cls, name):
        member = _static_member(cls, name)
        if member is not None:
            member.delete_class()
            return
        if name.startswith("__") and name.endswith("__"):
            type.__delattr__(cls, name)
            return
        raise ReadonlyErr.make(f"{cls.__qualname__}.{name} is read-only")

    def __repr__(cls):
        if cls.__facade_registry__ is None:
            return type.__repr__(cls)
        return f"<public class '{cls.__module__}.{cls.__qualname__}'>"


class PublicObj(metaclass=PublicType):
    """Base class of every public class.

    Carries the construction protocol shared by all public classes:

    - PublicCls(private_instance): wrap an existing private instance;
      raises AlreadyBoundErr if it already has a public instance
    - PublicCls(*args, **kwargs): translate the arguments to private,
      construct the private class, then wrap the result
    - PublicCls.resolve(private_instance): look up or lazily wrap

    Binding is permanent: once an instance is bound it is never rebound.
    """

    __slots__ = ("__weakref__",)

    # Registry the public class was compiled into (None on this base)
    __facade_registry__ = None

    def __new__(cls, *args, **kwargs):
        if _bridge_of(cls) is None:
            raise TypeError(f"{cls.__qualname__} is not a compiled public class")
        return object.__new__(cls)

    def __init__(self, *args, **kwargs):
        registry, private_cls = _bridge_of(type(self))
        if registry.is_bound(self):
            raise AlreadyBoundErr.make(f"{type(self).__qualname__} instance is already bound")

        if len(args) == 1 and not kwargs and isinstance(args[0], private_cls):
            # Wrap form: constructed with a private instance
            private = args[0]
        else:
            # Construct form: constructed from the public class
            private_args, private_kwargs = registry.translator().to_private_args(args, kwargs)
            private = private_cls(*private_args, **private_kwargs)

        registry.bind_instances(self, private)

    @classmethod
    def resolve(cls, private_instance):
        """Return the public instance for private_instance.

        Creates and binds one on demand if private_instance is an instance
        of this class's private class. Raises UnrelatedInstanceErr
        otherwise.
        """
        bridge = _bridge_of(cls)
        if bridge is None:
            raise TypeError(f"{cls.__qualname__} is not a compiled public class")
        registry, private_cls = bridge

        with registry.lock():
            existing = registry.public_instance(private_instance)
            if existing is not None:
                return existing
            if isinstance(private_instance, private_cls):
                return cls(private_instance)

        raise UnrelatedInstanceErr.make(
            f"{cls.__qualname__}.resolve(private_instance) -> "
            f"private instance does not relate to this public class")

    def __copy__(self):
        # A copy would be a second, unbound public object
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce_ex__(self, protocol):
        raise TypeError(f"cannot pickle public {type(self).__qualname__} instance")

    def __repr__(self):
        registry = type(self).__facade_registry__
        state = "" if registry is not None and registry.is_bound(self) else " (unbound)"
        return f"<public {type(self).__qualname__}{state}>"


# Module-level helpers so that public classes inherit no marker-named members

def _static_member(cls, name):
    """StaticMember found for name along the MRO, or None."""
    from .Compiler import StaticMember
    for klass in cls.__mro__:
        if name in vars(klass):
            member = vars(klass)[name]
            return member if isinstance(member, StaticMember) else None
    return None


def _bridge_of(cls):
    """(registry, private class) of the nearest compiled class in the MRO."""
    registry = cls.__facade_registry__
    if registry is None:
        return None
    for klass in cls.__mro__:
        private_cls = registry.private_class(klass)
        if private_cls is not None:
            return registry, private_cls
    return None
