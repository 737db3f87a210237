"""
Built-in functions for the Street scripting language

Each entry of the registry is a runtime value declared (constant) into the
global environment. Native callables receive the evaluated arguments and the
caller's environment.
"""

import math
import random
import sys
import time
from typing import Callable, Dict, List, TextIO

from errors import TypeMismatchError
from values import (
    NumberVal, FunctionVal, NativeFnVal,
    MK_NULL, MK_NUMBER, MK_STRING, MK_OBJECT, MK_NATIVE_FN,
    CYCLE_TEXT, to_display, to_plain,
)

def stringify(obj, _active=None) -> str:
    """Render plain data the way print shows it"""
    if obj is None:
        return "null"
    if isinstance(obj, bool):
        return "true" if obj else "false"
    if isinstance(obj, str):
        return obj
    if isinstance(obj, (int, float)):
        return to_display(MK_NUMBER(obj))
    if isinstance(obj, dict):
        active = _active if _active is not None else set()
        if id(obj) in active:
            return CYCLE_TEXT
        active.add(id(obj))
        pairs = [f"{key}: {stringify(value, active)}" for key, value in obj.items()]
        active.discard(id(obj))
        return "{ " + ", ".join(pairs) + " }" if pairs else "{}"
    return str(obj)

def _number_arg(name: str, args: List, index: int = 0) -> float:
    value = args[index] if index < len(args) else MK_NULL()
    if not isinstance(value, NumberVal):
        raise TypeMismatchError.expected(name, value.type)
    return value.value

def _math_fn(name: str, operation: Callable[[float], float]) -> NativeFnVal:
    def call(args, env):
        return MK_NUMBER(operation(_number_arg(f"math.{name}", args)))
    return MK_NATIVE_FN(call, f"math.{name}")

def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan

def _integral(operation: Callable[[float], int]) -> Callable[[float], float]:
    # floor and friends reject NaN and infinities, which pass through unchanged
    return lambda x: operation(x) if math.isfinite(x) else x

def create_math_object():
    return MK_OBJECT({
        "pi": MK_NUMBER(math.pi),
        "sqrt": _math_fn("sqrt", _sqrt),
        "abs": _math_fn("abs", abs),
        "floor": _math_fn("floor", _integral(math.floor)),
        "ceil": _math_fn("ceil", _integral(math.ceil)),
        "round": _math_fn("round", _integral(lambda x: math.floor(x + 0.5))),
        "random": MK_NATIVE_FN(lambda args, env: MK_NUMBER(random.random()), "math.random"),
    })

def create_natives(output: TextIO = None, input_fn: Callable[[str], str] = input) -> Dict[str, object]:
    """Build the registry; output defaults to the current sys.stdout at call time"""

    def native_print(args, env):
        stream = output if output is not None else sys.stdout
        for arg in args:
            if isinstance(arg, (FunctionVal, NativeFnVal)):
                stream.write(to_display(arg) + "\n")
            else:
                stream.write(stringify(to_plain(arg)) + "\n")
        stream.flush()
        return MK_NULL()

    def native_input(args, env):
        prompt = to_display(args[0]) if args else ""
        try:
            return MK_STRING(input_fn(prompt))
        except EOFError:
            return MK_NULL()

    def native_time(args, env):
        return MK_NUMBER(time.time() * 1000)

    return {
        "print": MK_NATIVE_FN(native_print, "print"),
        "input": MK_NATIVE_FN(native_input, "input"),
        "time": MK_NATIVE_FN(native_time, "time"),
        "math": create_math_object(),
    }
