"""
gofront Parser Package

Implements a recursive descent parser with bounded lookahead.
Produces an immutable AST plus an ordered list of error messages.

Key Features:
- Lookahead buffer of fixed depth that hides comments
- Qualified names, calls, unary expressions and assignments
- var/const declarations (single and grouped), type expressions
- Function signatures with named multi-value results
- Fail-fast module driver; no error resynchronization
"""

from .ast_nodes import *
from .parser import Parser, parse_string, parse_file, MIN_LOOKAHEAD
from .lookahead import TokenBuffer, DEFAULT_LOOKAHEAD

__all__ = [
    # Core parser
    "Parser", "TokenBuffer", "DEFAULT_LOOKAHEAD", "MIN_LOOKAHEAD",
    "parse_string", "parse_file",

    # AST nodes
    "Module", "ImportStmt", "Function", "ParameterDecl", "ParameterList",
    "VariableDecl", "VariableGroup",
    "QualifiedName", "UnaryExpr", "BinaryExpr", "AssignStmt",
    "NameLit", "StringLit", "NumberLit", "CallExpr",
    "NamedType", "PointerType", "ArrayType", "EmptyInterface",
    "Expr", "TypeExpr", "TypeExprOrParams", "Stmt", "TopLevelStmt",
    "Operator", "ASTVisitor",
]
