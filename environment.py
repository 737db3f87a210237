"""
Environment and scoping system for the Street scripting language
"""

import logging
from typing import Dict, Optional, Set

from errors import UndeclaredVariableError, RedeclarationError, ConstAssignmentError
from source_map import Span
from values import MK_BOOL, MK_NULL

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

class Environment:
    """One lexical scope; the global scope is the only one without a parent"""

    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.variables: Dict[str, object] = {}
        self.constants: Set[str] = set()

    def declare(self, name: str, value, constant: bool = False, span: Optional[Span] = None):
        """Bind a new name in this exact scope; shadowing outer scopes is fine"""
        if name in self.variables:
            raise RedeclarationError.create(name, span)

        self.variables[name] = value
        if constant:
            self.constants.add(name)
        return value

    def assign(self, name: str, value, span: Optional[Span] = None):
        """Rebind the nearest existing binding of name"""
        env = self.resolve(name, span)

        if name in env.constants:
            raise ConstAssignmentError.create(name, span)

        env.variables[name] = value
        return value

    def lookup(self, name: str, span: Optional[Span] = None):
        return self.resolve(name, span).variables[name]

    def resolve(self, name: str, span: Optional[Span] = None) -> 'Environment':
        """Scope that owns name, walking outward"""
        env = self
        while env is not None:
            if name in env.variables:
                return env
            env = env.parent

        raise UndeclaredVariableError.create(name, span)

    def is_global(self) -> bool:
        return self.parent is None

def create_global_env(natives: Optional[Dict[str, object]] = None) -> Environment:
    """Root scope holding true, false, null and the native registry"""
    env = Environment()
    env.declare("true", MK_BOOL(True), True)
    env.declare("false", MK_BOOL(False), True)
    env.declare("null", MK_NULL(), True)

    for name, value in (natives or {}).items():
        if name in env.variables:
            logger.debug("Skipping native %s, name is reserved", name)
            continue
        env.declare(name, value, True)

    return env
