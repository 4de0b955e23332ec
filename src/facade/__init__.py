#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

"""
facade - derive restricted public classes from private implementation classes.
"""

# Errors
from .Err import Err, NotAClassErr, AlreadyBoundErr, UnrelatedInstanceErr, ReadonlyErr

# Ambient
from .Config import Config
from .Log import Log, LogLevel, LogRec

# Reflection
from .Slot import Slot, FConst
from .Field import Field, Accessor
from .Method import Method
from .Type import Type

# Identity and translation
from .Retention import Retention
from .Registry import Registry
from .ValueKind import ValueKind
from .Translator import Translator

# Compilation
from .PublicObj import PublicObj, PublicType
from .Compiler import Compiler
from .Builder import PublicClassBuilder, get_public_class, is_public_class
