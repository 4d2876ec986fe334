"""
Abstract Syntax Tree node definitions for gofront.

Every node is a frozen dataclass. Sequences are stored as tuples, so a node
is immutable the moment the parser returns it and two trees built from the
same input compare equal. Each syntactic category (expression, type,
statement) is a closed Union of node classes, so consumers can dispatch on
the concrete class instead of inspecting loosely typed fields.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Tuple, Union


class Operator(Enum):
    """Closed set of operators an expression node may carry."""
    NONE = auto()
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    EQ = auto()
    NE = auto()
    LT = auto()
    GT = auto()
    LE = auto()
    GE = auto()
    ASSIGN = auto()
    DEREF = auto()


class ASTVisitor:
    """
    Visitor over AST nodes.

    visit() dispatches to a method named visit_<ClassName>, falling back to
    generic_visit() when the subclass does not define one.
    """

    def visit(self, node: Any) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: Any) -> Any:
        raise NotImplementedError(f"No visitor for {type(node).__name__}")


# ============================================================================
# Names
# ============================================================================

@dataclass(frozen=True)
class QualifiedName:
    """Dotted name chain such as fmt.Println; always at least one segment."""
    segments: Tuple[str, ...]

    def __post_init__(self):
        if not self.segments:
            raise ValueError("QualifiedName needs at least one segment")

    def __str__(self) -> str:
        return ".".join(self.segments)


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class UnaryExpr:
    """Prefix operation: +x, -x, or *x (dereference)."""
    op: Operator
    right: "Expr"


@dataclass(frozen=True)
class BinaryExpr:
    """Binary operation. The parser does not build these yet."""
    op: Operator
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class AssignStmt:
    """Assignment `left = right`, or short declaration `left := right`."""
    op: Operator
    left: QualifiedName
    right: "Expr"
    define: bool = False


@dataclass(frozen=True)
class NameLit:
    name: QualifiedName


@dataclass(frozen=True)
class StringLit:
    value: str


@dataclass(frozen=True)
class NumberLit:
    value: str  # Unvalidated lexeme, e.g. "1.5e10"


@dataclass(frozen=True)
class CallExpr:
    callee: QualifiedName
    args: Tuple["Expr", ...] = ()


Expr = Union[UnaryExpr, BinaryExpr, AssignStmt, NameLit, StringLit, NumberLit, CallExpr]


# ============================================================================
# Type system
# ============================================================================

@dataclass(frozen=True)
class NamedType:
    """Type referenced by (possibly qualified) name, e.g. int or time.Duration."""
    name: QualifiedName


@dataclass(frozen=True)
class PointerType:
    element: "TypeExpr"


@dataclass(frozen=True)
class ArrayType:
    """Array or slice type; length is None for []T."""
    length: Optional[Expr]
    element: "TypeExpr"


@dataclass(frozen=True)
class EmptyInterface:
    """The empty interface type, interface{}."""


TypeExpr = Union[NamedType, PointerType, ArrayType, EmptyInterface]


# ============================================================================
# Declarations
# ============================================================================

@dataclass(frozen=True)
class VariableDecl:
    """
    One var/const specification: `a, b int = 1, 2`.

    Names need not be unique; that is left to a later stage.
    """
    names: Tuple[str, ...]
    type: Optional[TypeExpr] = None
    values: Tuple[Expr, ...] = ()
    is_const: bool = False


@dataclass(frozen=True)
class VariableGroup:
    """Parenthesized var/const block; members share the group's is_const."""
    members: Tuple[VariableDecl, ...]
    is_const: bool = False


@dataclass(frozen=True)
class ParameterDecl:
    names: Tuple[str, ...]
    type: Optional[TypeExpr] = None


@dataclass(frozen=True)
class ParameterList:
    """Parenthesized result list of a function, e.g. (n int, err error)."""
    params: Tuple[ParameterDecl, ...]


TypeExprOrParams = Union[TypeExpr, ParameterList]

Stmt = Union[VariableDecl, VariableGroup, AssignStmt, CallExpr]


@dataclass(frozen=True)
class Function:
    name: str
    parameters: Tuple[ParameterDecl, ...]
    return_type: Optional[TypeExprOrParams]
    body: Tuple[Stmt, ...]


TopLevelStmt = Union[VariableDecl, VariableGroup, Function]


# ============================================================================
# Top-level nodes
# ============================================================================

@dataclass(frozen=True)
class ImportStmt:
    names: Tuple[str, ...]


@dataclass(frozen=True)
class Module:
    """Root AST node representing one parsed source unit."""
    package: Optional[str] = None
    imports: Optional[ImportStmt] = None
    body: Tuple[TopLevelStmt, ...] = ()
