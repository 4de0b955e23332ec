#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import logging
import re
import time


class LogLevel:
    """
    Severity of a log record, ordered debug < info < warn < err < silent.

    Each level maps onto a standard library logging level; silent sits
    above CRITICAL so nothing is forwarded.
    """

    _vals = {}

    def __init__(self, name, ordinal, py_level):
        self._name = name
        self._ordinal = ordinal
        self._py_level = py_level

    @staticmethod
    def debug():
        return LogLevel._vals["debug"]

    @staticmethod
    def info():
        return LogLevel._vals["info"]

    @staticmethod
    def warn():
        return LogLevel._vals["warn"]

    @staticmethod
    def err():
        return LogLevel._vals["err"]

    @staticmethod
    def silent():
        return LogLevel._vals["silent"]

    @staticmethod
    def from_str(name, checked=True):
        val = LogLevel._vals.get(str(name).strip().lower())
        if val is None and checked:
            raise ValueError(f"Unknown log level: {name}")
        return val

    @staticmethod
    def vals():
        return sorted(LogLevel._vals.values(), key=LogLevel.ordinal)

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def py_level(self):
        """Matching standard library logging level"""
        return self._py_level

    def __lt__(self, other):
        return self._ordinal < other._ordinal

    def __eq__(self, other):
        if isinstance(other, LogLevel):
            return self._ordinal == other._ordinal
        return False

    def __hash__(self):
        return hash(self._ordinal)

    def __str__(self):
        return self._name

    def __repr__(self):
        return f"LogLevel.{self._name}"


for _ordinal, (_name, _py) in enumerate((
        ("debug", logging.DEBUG),
        ("info", logging.INFO),
        ("warn", logging.WARNING),
        ("err", logging.ERROR),
        ("silent", logging.CRITICAL + 10))):
    LogLevel._vals[_name] = LogLevel(_name, _ordinal, _py)


class LogRec:
    """
    One record handed to every global handler.
    """

    def __init__(self, time, level, log_name, msg, err=None):
        self._time = time
        self._level = level
        self._log_name = log_name
        self._msg = msg
        self._err = err

    def time(self):
        """Creation time in seconds since the epoch"""
        return self._time

    def level(self):
        return self._level

    def log_name(self):
        return self._log_name

    def msg(self):
        return self._msg

    def err(self):
        return self._err

    def to_str(self):
        return f"[{self._level}] [{self._log_name}] {self._msg}"

    def __str__(self):
        return self.to_str()


class Log:
    """
    Named log forwarding to the standard library logger of the same name.

    Records at or above the log's level are first passed to the global
    handlers, then to logging. Logs obtained through get() are cached by
    name and start at the level configured under "log.level".
    """

    _logs = {}
    _handlers = []
    _name_pattern = re.compile(r"[A-Za-z0-9_.]+")

    def __init__(self, name, register=True):
        if not Log._name_pattern.fullmatch(name or ""):
            raise ValueError(f"Invalid log name: {name}")
        if register and name in Log._logs:
            raise ValueError(f"Log already registered: {name}")

        self._name = name
        self._level = LogLevel.info()
        self._py_logger = logging.getLogger(name)

        if register:
            Log._logs[name] = self

    @staticmethod
    def get(name):
        """Get or create a log by name"""
        log = Log._logs.get(name)
        if log is not None:
            return log
        log = Log(name)

        from .Config import Config
        configured = Config.cur().config("log.level")
        if configured is not None:
            level = LogLevel.from_str(configured, checked=False)
            if level is not None:
                log.level(level)
        return log

    def name(self):
        return self._name

    def level(self, value=None):
        """Get the level, or set it when value is given"""
        if value is None:
            return self._level
        self._level = value
        return None

    def is_enabled(self, level):
        if level is LogLevel.silent():
            return False
        return not level < self._level

    def is_debug(self):
        return self.is_enabled(LogLevel.debug())

    def debug(self, msg, err=None):
        self._emit(LogLevel.debug(), msg, err)

    def info(self, msg, err=None):
        self._emit(LogLevel.info(), msg, err)

    def warn(self, msg, err=None):
        self._emit(LogLevel.warn(), msg, err)

    def err(self, msg, err=None):
        self._emit(LogLevel.err(), msg, err)

    def _emit(self, level, msg, err):
        if self.is_enabled(level):
            self.log(LogRec(time.time(), level, self._name, msg, err))

    def log(self, rec):
        """Dispatch a record to the handlers and the stdlib logger"""
        for handler in list(Log._handlers):
            handler(rec)
        self._py_logger.log(rec.level().py_level(), rec.msg(), exc_info=rec.err())

    @staticmethod
    def add_handler(handler):
        """Install a handler called with every enabled LogRec"""
        if not callable(handler):
            raise TypeError("Handler must be callable")
        Log._handlers.append(handler)

    @staticmethod
    def remove_handler(handler):
        if handler in Log._handlers:
            Log._handlers.remove(handler)
