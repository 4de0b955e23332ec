#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#


class ValueKind:
    """
    Kind of a value crossing the public/private boundary.

    Values:
    - entity: instance with a counterpart (or a compiled private class)
    - klass: class with a registered counterpart
    - sequence: list or tuple, translated element-wise
    - pending: future or awaitable, translated on completion
    - scalar: everything else, passed through
    """

    _vals = {}

    def __init__(self, name, ordinal):
        self._name = name
        self._ordinal = ordinal

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def __str__(self):
        return self._name

    def __repr__(self):
        return f"ValueKind.{self._name}"

    def __eq__(self, other):
        if isinstance(other, ValueKind):
            return self._ordinal == other._ordinal
        return False

    def __hash__(self):
        return hash(self._ordinal)

    @staticmethod
    def entity():
        return ValueKind._vals["entity"]

    @staticmethod
    def klass():
        return ValueKind._vals["klass"]

    @staticmethod
    def sequence():
        return ValueKind._vals["sequence"]

    @staticmethod
    def pending():
        return ValueKind._vals["pending"]

    @staticmethod
    def scalar():
        return ValueKind._vals["scalar"]

    @staticmethod
    def vals():
        return [ValueKind._vals[n] for n in ("entity", "klass", "sequence", "pending", "scalar")]


ValueKind._vals["entity"] = ValueKind("entity", 0)
ValueKind._vals["klass"] = ValueKind("klass", 1)
ValueKind._vals["sequence"] = ValueKind("sequence", 2)
ValueKind._vals["pending"] = ValueKind("pending", 3)
ValueKind._vals["scalar"] = ValueKind("scalar", 4)
