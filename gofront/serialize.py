"""
JSON rendering of parsed modules.

Every AST node becomes a dict tagged with its class name under "node";
operators are rendered by name and tuples become lists.
"""

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .parser.ast_nodes import ASTVisitor, Module


class ModuleSerializer(ASTVisitor):
    """Visitor producing JSON-ready structures from AST nodes."""

    def generic_visit(self, node: Any) -> Dict[str, Any]:
        if not is_dataclass(node):
            raise TypeError(f"Cannot serialize {type(node).__name__}")

        result: Dict[str, Any] = {"node": type(node).__name__}
        for f in fields(node):
            result[f.name] = self._convert(getattr(node, f.name))
        return result

    def _convert(self, value: Any) -> Any:
        if value is None or isinstance(value, (str, bool, int)):
            return value
        if isinstance(value, Enum):
            return value.name
        if isinstance(value, (tuple, list)):
            return [self._convert(item) for item in value]
        return self.visit(value)


def module_to_dict(module: Module) -> Dict[str, Any]:
    return ModuleSerializer().visit(module)


def to_json(module: Module, indent: Optional[int] = 2) -> str:
    """Render a module as a JSON document."""
    return json.dumps(module_to_dict(module), indent=indent)
