"""Shared pytest fixtures: sample private classes and builders."""

from __future__ import annotations

import pytest

from facade import Config, PublicClassBuilder, Retention


class Counter:
    """Counts things."""

    LIMIT = 100

    def __init__(self, start=0):
        self._count = start

    def increment(self, n=1):
        """Add n and return self."""
        self._count += n
        return self

    @property
    def count(self):
        return self._count

    @staticmethod
    def create():
        return Counter()

    def _reset(self):
        self._count = 0


class Account:
    """Account with an owner and a list of counters."""

    def __init__(self, owner):
        self._owner = owner
        self._counters = []

    @property
    def owner(self):
        return self._owner

    @owner.setter
    def owner(self, value):
        self._owner = value

    def add(self, counter):
        self._counters.append(counter)
        return len(self._counters)

    def counters(self):
        return list(self._counters)

    def pair(self):
        return (self._counters[0], "first") if self._counters else ()

    def echo(self, value):
        return value

    @classmethod
    def of(cls, owner):
        return cls(owner)


@pytest.fixture(autouse=True)
def reset_config(monkeypatch, tmp_path):
    """Isolate config lookups from the developer environment."""
    for key in ("FACADE_MARKER", "FACADE_LOG_LEVEL", "FACADE_HOME"):
        monkeypatch.delenv(key, raising=False)
    Config.reset(tmp_path)
    yield
    Config.reset()


@pytest.fixture
def builder():
    return PublicClassBuilder()


@pytest.fixture
def weak_builder():
    return PublicClassBuilder(Retention.weak())


@pytest.fixture
def counter_cls():
    return Counter


@pytest.fixture
def account_cls():
    return Account
