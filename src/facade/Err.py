#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#


class Err(Exception):
    """Base error class"""

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        self._msg = msg
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        """Factory method - creates instance of the calling class"""
        return cls(msg, cause)

    def msg(self):
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def to_str(self):
        name = type(self).__name__
        if self._msg:
            return f"{name}: {self._msg}"
        return name

    def __str__(self):
        return self._msg if self._msg is not None else ""

    def __repr__(self):
        return self.to_str()


class NotAClassErr(Err, TypeError):
    """Compilation requested on a value that is not a class"""
    pass


class AlreadyBoundErr(Err, ValueError):
    """Private instance already has an associated public instance"""
    pass


class UnrelatedInstanceErr(Err, TypeError):
    """Private instance does not relate to the public class"""
    pass


class ReadonlyErr(Err, AttributeError):
    """Modification of a read-only public member"""
    pass
