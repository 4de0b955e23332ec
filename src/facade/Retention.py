#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#


class Retention:
    """
    Retention policy of a registry's instance-level associations.

    Values:
    - weak: the registry never keeps a public instance alive; the public
      instance owns its private instance for its own lifetime
    - strong: both instances are kept for the life of the registry
    """

    _vals = {}

    def __init__(self, name, ordinal):
        self._name = name
        self._ordinal = ordinal

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def is_weak(self):
        return self._ordinal == 0

    def is_strong(self):
        return self._ordinal == 1

    def __str__(self):
        return self._name

    def __repr__(self):
        return f"Retention.{self._name}"

    def __eq__(self, other):
        if isinstance(other, Retention):
            return self._ordinal == other._ordinal
        return False

    def __hash__(self):
        return hash(self._ordinal)

    @staticmethod
    def weak():
        return Retention._vals["weak"]

    @staticmethod
    def strong():
        return Retention._vals["strong"]

    @staticmethod
    def from_str(name, checked=True):
        val = Retention._vals.get(str(name).strip().lower())
        if val is None and checked:
            raise ValueError(f"Unknown retention: {name}")
        return val

    @staticmethod
    def vals():
        return [Retention._vals["weak"], Retention._vals["strong"]]


Retention._vals["weak"] = Retention("weak", 0)
Retention._vals["strong"] = Retention("strong", 1)
