from typing import Any, Dict, List, Optional

from linea.ast import FunctionDeclaration
from linea.errors import LineaRuntimeError


class Environment:
    """Two-level scope: one global table and a stack of call frames.

    Only the innermost frame is ever visible. A function body sees its own
    parameters and the globals, never the locals of the caller.
    """
    def __init__(self):
        self.globals: Dict[str, Any] = {}
        self.functions: Dict[str, FunctionDeclaration] = {}
        self.frames: List[Dict[str, Any]] = []

    @property
    def local(self) -> Optional[Dict[str, Any]]:
        if self.frames:
            return self.frames[-1]
        return None

    @property
    def depth(self) -> int:
        return len(self.frames)

    def get(self, name: str) -> Any:
        local = self.local
        if local is not None and name in local:
            return local[name]
        if name in self.globals:
            return self.globals[name]
        raise LineaRuntimeError.undefined_variable(name)

    def set(self, name: str, value: Any):
        # write to the local frame only if it already binds the name
        local = self.local
        if local is not None and name in local:
            local[name] = value
        else:
            self.globals[name] = value

    def declare(self, name: str, value: Any):
        local = self.local
        if local is not None:
            local[name] = value
        else:
            self.globals[name] = value

    def define_function(self, func: FunctionDeclaration):
        self.functions[func.name] = func

    def lookup_function(self, name: str) -> FunctionDeclaration:
        if name not in self.functions:
            raise LineaRuntimeError.undefined_function(name)
        return self.functions[name]

    def push_frame(self, bindings: Dict[str, Any]):
        self.frames.append(dict(bindings))

    def pop_frame(self):
        self.frames.pop()
