"""
Runtime values for the Street scripting language

A closed set of tagged values. Every helper in this module handles each
variant explicitly and treats anything else as an internal error.
"""

import math
from decimal import Decimal
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set

from ast_nodes import Statement
from errors import ErrorCode, InternalError

@dataclass(frozen=True)
class NullVal:
    type: str = field(default="null", init=False)
    value: None = field(default=None, init=False)

@dataclass(frozen=True)
class BooleanVal:
    value: bool = True
    type: str = field(default="boolean", init=False)

@dataclass(frozen=True)
class NumberVal:
    value: float = 0.0
    type: str = field(default="number", init=False)

@dataclass(frozen=True)
class StringVal:
    value: str = ""
    type: str = field(default="string", init=False)

@dataclass(eq=False)
class ObjectVal:
    """The only mutable value: member assignment updates ``properties`` in place"""
    properties: Dict[str, Any] = field(default_factory=dict)
    type: str = field(default="object", init=False)

@dataclass(eq=False)
class FunctionVal:
    """User function; shares its declaration environment, which makes closures work"""
    name: str
    parameters: List[str]
    body: List[Statement]
    declaration_env: Any = field(repr=False)
    type: str = field(default="function", init=False)

@dataclass(eq=False)
class NativeFnVal:
    """Host callable invoked as call(args, env)"""
    call: Callable[[list, Any], Any]
    name: str = "native"
    type: str = field(default="native-fn", init=False)

RuntimeVal = (NullVal, BooleanVal, NumberVal, StringVal, ObjectVal, FunctionVal, NativeFnVal)

CYCLE_TEXT = "{...}"

def MK_NULL() -> NullVal:
    return NullVal()

def MK_BOOL(value: bool = True) -> BooleanVal:
    return BooleanVal(bool(value))

def MK_NUMBER(value: float = 0) -> NumberVal:
    return NumberVal(float(value))

def MK_STRING(value: str) -> StringVal:
    return StringVal(value)

def MK_OBJECT(properties: Dict[str, Any] = None) -> ObjectVal:
    return ObjectVal(dict(properties or {}))

def MK_NATIVE_FN(call, name: str = "native") -> NativeFnVal:
    return NativeFnVal(call, name)

def is_truthy(value) -> bool:
    """0, NaN, "", false and null are falsy; everything else is truthy"""
    if isinstance(value, NullVal):
        return False
    if isinstance(value, NumberVal):
        return bool(value.value) and not math.isnan(value.value)
    if isinstance(value, (BooleanVal, StringVal)):
        return bool(value.value)
    if isinstance(value, (ObjectVal, FunctionVal, NativeFnVal)):
        return True
    raise InternalError.from_simple(ErrorCode.INTERNAL_ERROR, f"not a runtime value: {value!r}")

def format_number(number: float) -> str:
    """Positional notation, never an exponent; whole numbers print without a trailing .0"""
    number = float(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    # repr is the shortest text that reads back as the same float
    return format(Decimal(repr(number)), 'f')

def to_display(value, _active: Set[int] = None) -> str:
    """Text used when a value is joined to a string; a cycle back to an enclosing object shows as {...}"""
    if isinstance(value, NullVal):
        return "null"
    if isinstance(value, BooleanVal):
        return "true" if value.value else "false"
    if isinstance(value, NumberVal):
        return format_number(value.value)
    if isinstance(value, StringVal):
        return value.value
    if isinstance(value, ObjectVal):
        active = _active if _active is not None else set()
        if id(value) in active:
            return CYCLE_TEXT
        active.add(id(value))
        pairs = [f"{key}: {to_display(item, active)}" for key, item in value.properties.items()]
        active.discard(id(value))
        return "{ " + ", ".join(pairs) + " }" if pairs else "{}"
    if isinstance(value, FunctionVal):
        return f"fn {value.name}({', '.join(value.parameters)})"
    if isinstance(value, NativeFnVal):
        return f"native fn {value.name}"
    raise InternalError.from_simple(ErrorCode.INTERNAL_ERROR, f"not a runtime value: {value!r}")

def to_plain(value, _memo: Dict[int, dict] = None):
    """Recursive conversion to plain Python data, used for printing and logging

    Objects map to dicts one to one, so an object graph with cycles becomes
    dicts with the same cycles.
    """
    if isinstance(value, NullVal):
        return None
    if isinstance(value, (BooleanVal, StringVal)):
        return value.value
    if isinstance(value, NumberVal):
        number = float(value.value)
        return int(number) if number.is_integer() else number
    if isinstance(value, ObjectVal):
        memo = _memo if _memo is not None else {}
        if id(value) in memo:
            return memo[id(value)]
        plain = memo[id(value)] = {}
        for key, item in value.properties.items():
            plain[key] = to_plain(item, memo)
        return plain
    if isinstance(value, FunctionVal):
        return {"name": value.name, "body": value.body, "internal": False}
    if isinstance(value, NativeFnVal):
        return {"name": value.name, "internal": True}
    raise InternalError.from_simple(ErrorCode.INTERNAL_ERROR, f"not a runtime value: {value!r}")

def values_equal(left, right) -> bool:
    """== semantics: by value for primitives, by identity for objects and functions"""
    if type(left) is not type(right):
        return False
    if isinstance(left, NullVal):
        return True
    if isinstance(left, (BooleanVal, NumberVal, StringVal)):
        return left.value == right.value
    return left is right
