"""
gofront recursive descent parser.

Pulls tokens through a bounded lookahead buffer and builds the AST bottom-up.
Grammar routines never raise on bad input: they record a diagnostic and
return None, and every caller hands that None straight back up. There is no
resynchronization, so one failure ends the enclosing statement.

Grammar summary:

    Module        = { PackageClause | ImportDecl | VarDecl | FuncDecl } EOF
    VarDecl       = ( "var" | "const" ) ( "(" { SingleVariable } ")" | SingleVariable )
    SingleVariable= NAME { "," NAME } [ Type ] [ "=" Expression { "," Expression } ]
    Type          = "[" [ Expression ] "]" Type | QualifiedName
                  | "interface" "{" "}" | "*" Type
    FuncDecl      = "func" NAME Parameters [ Parameters | Type ] Block
    Block         = "{" { Statement } "}"
    Expression    = UnaryExpr
    UnaryExpr     = ( "+" | "-" | "*" ) UnaryExpr | Operand
    Operand       = QualifiedName [ "(" [ Expression { "," Expression } ] ")" ]
                  | STRING | NUMBER
    QualifiedName = NAME { "." NAME }
"""

import logging
from functools import partial
from typing import Callable, List, Optional, Tuple

from ..lexer.lexer import Lexer
from ..lexer.tokens import TokenKind
from ..lexer.errors import Diagnostic
from .ast_nodes import (
    Operator, QualifiedName, UnaryExpr, AssignStmt, NameLit, StringLit, NumberLit,
    CallExpr, Expr, NamedType, PointerType, ArrayType, EmptyInterface, TypeExpr,
    VariableDecl, VariableGroup, ParameterDecl, ParameterList, TypeExprOrParams,
    Function, Stmt, TopLevelStmt, ImportStmt, Module
)
from .errors import (
    create_unexpected_token_error, create_message_error, create_unsupported_error,
    create_unrecognized_token_error, describe
)
from .lookahead import TokenBuffer, DEFAULT_LOOKAHEAD


logger = logging.getLogger(__name__)


UNARY_OPERATORS = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUB,
    TokenKind.ASTERISK: Operator.DEREF,
}

ASSIGNMENT_OPERATORS = {
    TokenKind.ASSIGN: False,
    TokenKind.DEFINE: True,
}

# Tokens after a leading name that look like the start of an assignment
# operator the language does not have (x += 1, x++, x : = 1)
ASSIGNMENT_LIKE = frozenset({
    TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH,
    TokenKind.PERCENT, TokenKind.COLON,
})

TYPE_START = frozenset({
    TokenKind.NAME, TokenKind.LBRACKET, TokenKind.ASTERISK, TokenKind.INTERFACE,
})

# Deepest peek the grammar makes: "interface" "{" "}" needs two tokens
# matched plus one spare slot
MIN_LOOKAHEAD = 3


class Parser:
    """
    gofront parser.

    One Parser parses one input. parse() returns the module (or None) along
    with the ordered list of error messages; the structured diagnostics are
    kept on self.diagnostics.
    """

    def __init__(self, lexer: Lexer, lookahead: int = DEFAULT_LOOKAHEAD):
        """
        Initialize parser over a lexer.

        Args:
            lexer: Token source; the parser takes exclusive ownership of it
            lookahead: Maximum number of tokens the grammar may peek ahead
        """
        if lookahead < MIN_LOOKAHEAD:
            raise ValueError(f"lookahead must be at least {MIN_LOOKAHEAD}, got {lookahead}")

        self.diagnostics: List[Diagnostic] = []
        self.tokens = TokenBuffer(lexer, self._report, lookahead)

        # In-progress module, frozen into a Module when parsing stops
        self._package: Optional[str] = None
        self._imports: Optional[ImportStmt] = None
        self._body: List[TopLevelStmt] = []

    @property
    def errors(self) -> List[str]:
        """Ordered error messages reported so far."""
        return [d.message for d in self.diagnostics]

    def parse(self) -> Tuple[Optional[Module], List[str]]:
        """
        Parse the whole input into a Module.

        A failed declaration or function stops the parse but keeps the items
        already collected. A token that cannot start any top-level item
        discards the module entirely and None is returned.

        Returns:
            (module or None, error messages)
        """
        while True:
            kind = self.tokens.peek_type()

            if kind == TokenKind.EOF:
                break
            elif kind == TokenKind.PACKAGE:
                self._parse_package()
            elif kind == TokenKind.IMPORT:
                self._parse_imports()
            elif kind in (TokenKind.VAR, TokenKind.CONST):
                if not self._append(self.parse_var_decl()):
                    break
            elif kind == TokenKind.FOR:
                if not self._append(self.parse_for()):
                    break
            elif kind == TokenKind.IF:
                if not self._append(self.parse_if()):
                    break
            elif kind == TokenKind.FUNC:
                if not self._append(self.parse_function()):
                    break
            elif kind == TokenKind.COMMENT:
                self.tokens.advance()
            else:
                self._report(create_unrecognized_token_error(self.tokens.peek()))
                logger.debug("unrecognized top-level token, discarding module")
                return None, self.errors

        module = Module(
            package=self._package,
            imports=self._imports,
            body=tuple(self._body),
        )
        logger.info("parsed module with %d top-level items and %d errors",
                    len(module.body), len(self.diagnostics))
        return module, self.errors

    def _append(self, item: Optional[TopLevelStmt]) -> bool:
        if item is None:
            logger.debug("top-level item failed, stopping parse")
            return False
        self._body.append(item)
        return True

    def _report(self, diagnostic: Diagnostic):
        logger.debug("error: %s", diagnostic.message)
        self.diagnostics.append(diagnostic)

    # Module-level clauses

    def _parse_package(self):
        """package NAME; a missing name is reported but not fatal."""
        self.tokens.advance()  # Consume 'package'

        name = self.tokens.peek()
        if self.tokens.require(TokenKind.NAME):
            self._package = name.text

    def _parse_imports(self):
        """
        import "path" | import ( "path" ... )

        Paths parsed before a malformed entry are kept. Repeated import
        clauses extend the same ImportStmt.
        """
        self.tokens.advance()  # Consume 'import'

        names: List[str] = []
        if self.tokens.expect(TokenKind.LPAREN):
            while not self.tokens.expect(TokenKind.RPAREN):
                path = self.tokens.peek()
                if not self.tokens.require(TokenKind.STRING):
                    break
                names.append(path.text)
        else:
            path = self.tokens.peek()
            if self.tokens.require(TokenKind.STRING):
                names.append(path.text)

        if self._imports is not None:
            names = list(self._imports.names) + names
        self._imports = ImportStmt(tuple(names))

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self) -> Optional[Expr]:
        """Expression = UnaryExpr. Binary operators are not supported."""
        return self.parse_unary_expr()

    def parse_unary_expr(self) -> Optional[Expr]:
        """
        UnaryExpr = ( "+" | "-" | "*" ) UnaryExpr | PrimaryExpr.

        Prefix operators are read in a loop and wrapped around the operand
        innermost first, so a long run such as ----x does not recurse.
        """
        operators: List[Operator] = []
        while self.tokens.peek_type() in UNARY_OPERATORS:
            operators.append(UNARY_OPERATORS[self.tokens.advance().kind])

        expr = self.parse_primary_expr()
        if expr is None:
            return None

        for operator in reversed(operators):
            expr = UnaryExpr(operator, expr)
        return expr

    def parse_primary_expr(self) -> Optional[Expr]:
        return self.parse_operand()

    def parse_operand(self) -> Optional[Expr]:
        """Operand = QualifiedName [ CallSuffix ] | STRING | NUMBER."""
        token = self.tokens.peek()

        if token.kind == TokenKind.NAME:
            name = self.parse_qualified_name()
            if name is None:
                return None
            if self.tokens.peek_type() == TokenKind.LPAREN:
                return self._parse_call(name)
            return NameLit(name)

        if token.kind == TokenKind.STRING:
            self.tokens.advance()
            return StringLit(token.text)

        if token.kind == TokenKind.NUMBER:
            self.tokens.advance()
            return NumberLit(token.text)

        self._report(create_unexpected_token_error("operand", token))
        return None

    def parse_qualified_name(self) -> Optional[QualifiedName]:
        """QualifiedName = NAME { "." NAME }."""
        first = self.tokens.peek()
        if first.kind != TokenKind.NAME:
            self._report(create_unexpected_token_error("name", first))
            return None
        self.tokens.advance()

        segments = [first.text]
        while self.tokens.expect(TokenKind.DOT):
            segment = self.tokens.peek()
            if not self.tokens.require(TokenKind.NAME):
                return None
            segments.append(segment.text)

        return QualifiedName(tuple(segments))

    def _parse_call(self, callee: QualifiedName) -> Optional[CallExpr]:
        """Argument list after a callee; the current token is '('."""
        self.tokens.advance()  # Consume (

        args: List[Expr] = []
        if self.tokens.peek_type() != TokenKind.RPAREN:
            arg = self.parse_expression()
            if arg is None:
                return None
            args.append(arg)

            while self.tokens.expect(TokenKind.COMMA):
                arg = self.parse_expression()
                if arg is None:
                    return None
                args.append(arg)

        if not self.tokens.require(TokenKind.RPAREN):
            return None
        return CallExpr(callee, tuple(args))

    def _parse_assignment(self, left: QualifiedName) -> Optional[AssignStmt]:
        """Assignment after its left-hand name: ( "=" | ":=" ) Expression."""
        token = self.tokens.peek()
        define = ASSIGNMENT_OPERATORS.get(token.kind)
        if define is None:
            self._report(create_unexpected_token_error("assignment operator", token))
            return None
        self.tokens.advance()

        right = self.parse_expression()
        if right is None:
            return None
        return AssignStmt(Operator.ASSIGN, left, right, define=define)

    # ========================================================================
    # Declarations
    # ========================================================================

    def parse_var_decl(self):
        """
        VarDecl = ( "var" | "const" ) ( "(" { SingleVariable } ")" | SingleVariable ).

        Returns a VariableGroup for the parenthesized form, a VariableDecl
        otherwise, or None on failure.
        """
        is_const = self.tokens.advance().kind == TokenKind.CONST

        if not self.tokens.expect(TokenKind.LPAREN):
            return self._parse_single_variable(is_const)

        members: List[VariableDecl] = []
        while not self.tokens.expect(TokenKind.RPAREN):
            member = self._parse_single_variable(is_const)
            if member is None:
                return None
            members.append(member)

        return VariableGroup(tuple(members), is_const)

    def _parse_single_variable(self, is_const: bool) -> Optional[VariableDecl]:
        """SingleVariable = NAME { "," NAME } [ Type ] [ "=" Expression { "," Expression } ]."""
        names = self._parse_name_list()
        if names is None:
            return None

        var_type = None
        if self.tokens.peek_type() in TYPE_START:
            var_type = self.parse_type()
            if var_type is None:
                return None

        values: List[Expr] = []
        if self.tokens.expect(TokenKind.ASSIGN):
            value = self.parse_expression()
            if value is None:
                return None
            values.append(value)

            while self.tokens.expect(TokenKind.COMMA):
                value = self.parse_expression()
                if value is None:
                    return None
                values.append(value)

        return VariableDecl(names, var_type, tuple(values), is_const)

    def _parse_name_list(self) -> Optional[Tuple[str, ...]]:
        """NAME { "," NAME }; every comma must be followed by a name."""
        first = self.tokens.peek()
        if not self.tokens.require(TokenKind.NAME):
            return None

        names = [first.text]
        while self.tokens.expect(TokenKind.COMMA):
            name = self.tokens.peek()
            if not self.tokens.require(TokenKind.NAME):
                return None
            names.append(name.text)
        return tuple(names)

    def parse_type(self) -> Optional[TypeExpr]:
        """
        Type = "[" [ Expression ] "]" Type | QualifiedName | "interface" "{" "}" | "*" Type.

        Array and pointer prefixes are collected first and applied to the
        element type innermost first.
        """
        wrappers: List[Callable[[TypeExpr], TypeExpr]] = []

        while True:
            kind = self.tokens.peek_type()
            if kind == TokenKind.ASTERISK:
                self.tokens.advance()
                wrappers.append(PointerType)
            elif kind == TokenKind.LBRACKET:
                self.tokens.advance()
                length = None
                if self.tokens.peek_type() != TokenKind.RBRACKET:
                    length = self.parse_expression()
                    if length is None:
                        return None
                if not self.tokens.require(TokenKind.RBRACKET):
                    return None
                wrappers.append(partial(ArrayType, length))
            else:
                break

        element = self._parse_element_type()
        if element is None:
            return None

        for wrap in reversed(wrappers):
            element = wrap(element)
        return element

    def _parse_element_type(self) -> Optional[TypeExpr]:
        """Named type or interface{} at the end of a prefix chain."""
        token = self.tokens.peek()

        if token.kind == TokenKind.NAME:
            name = self.parse_qualified_name()
            if name is None:
                return None
            return NamedType(name)

        if token.kind == TokenKind.INTERFACE:
            self.tokens.advance()
            if not self.tokens.expect_sequence(TokenKind.LBRACE, TokenKind.RBRACE):
                self._report(create_unexpected_token_error("'{}'", self.tokens.peek()))
                return None
            return EmptyInterface()

        self._report(create_unexpected_token_error("type", token))
        return None

    # ========================================================================
    # Functions
    # ========================================================================

    def parse_function(self) -> Optional[Function]:
        """FuncDecl = "func" NAME Parameters [ ReturnClause ] Block."""
        self.tokens.advance()  # Consume 'func'

        name = self.tokens.peek()
        if not self.tokens.require(TokenKind.NAME, "expected name of function"):
            return None

        parameters = self._parse_parameters()
        if parameters is None:
            return None

        return_type: Optional[TypeExprOrParams] = None
        if self.tokens.peek_type() != TokenKind.LBRACE:
            if self.tokens.peek_type() == TokenKind.LPAREN:
                results = self._parse_parameters()
                if results is None:
                    return None
                return_type = ParameterList(results)
            else:
                return_type = self.parse_type()
                if return_type is None:
                    return None

        body = self.parse_block()
        if body is None:
            return None

        return Function(name.text, parameters, return_type, body)

    def _parse_parameters(self) -> Optional[Tuple[ParameterDecl, ...]]:
        """Parameters = "(" [ ParameterDecl { "," ParameterDecl } ] ")"."""
        if not self.tokens.require(TokenKind.LPAREN):
            return None

        params: List[ParameterDecl] = []
        if self.tokens.peek_type() != TokenKind.RPAREN:
            param = self._parse_parameter_decl()
            if param is None:
                return None
            params.append(param)

            while self.tokens.expect(TokenKind.COMMA):
                param = self._parse_parameter_decl()
                if param is None:
                    return None
                params.append(param)

        if not self.tokens.require(TokenKind.RPAREN):
            return None
        return tuple(params)

    def _parse_parameter_decl(self) -> Optional[ParameterDecl]:
        """ParameterDecl = NAME { "," NAME } [ Type ]."""
        names = self._parse_name_list()
        if names is None:
            return None

        param_type = None
        if self.tokens.peek_type() in TYPE_START:
            param_type = self.parse_type()
            if param_type is None:
                return None
        return ParameterDecl(names, param_type)

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_block(self) -> Optional[Tuple[Stmt, ...]]:
        """Block = "{" { Statement } "}"."""
        if not self.tokens.require(TokenKind.LBRACE):
            return None

        statements: List[Stmt] = []
        while not self.tokens.expect(TokenKind.RBRACE):
            stmt = self.parse_statement()
            if stmt is None:
                return None
            statements.append(stmt)

        return tuple(statements)

    def parse_statement(self) -> Optional[Stmt]:
        """Dispatch on the leading token of a statement inside a block."""
        token = self.tokens.peek()

        if token.kind == TokenKind.FOR:
            return self.parse_for()
        if token.kind in (TokenKind.VAR, TokenKind.CONST):
            return self.parse_var_decl()
        if token.kind == TokenKind.IF:
            return self.parse_if()
        if token.kind == TokenKind.NAME:
            return self._parse_name_statement()

        self._report(create_message_error(f"unexpected token {describe(token)} in block", token))
        return None

    def _parse_name_statement(self) -> Optional[Stmt]:
        """Statement led by a name: a call, else an assignment."""
        name = self.parse_qualified_name()
        if name is None:
            return None

        kind = self.tokens.peek_type()
        if kind == TokenKind.LPAREN:
            return self._parse_call(name)
        if kind in ASSIGNMENT_OPERATORS or kind in ASSIGNMENT_LIKE:
            return self._parse_assignment(name)

        token = self.tokens.peek()
        self._report(create_message_error(f"unexpected token {describe(token)} after '{name}'", token))
        return None

    # Placeholder implementations for unsupported constructs

    def parse_for(self) -> None:
        """for loops are recognized but not parsed."""
        self._report(create_unsupported_error("for loop", self.tokens.peek()))
        return None

    def parse_if(self) -> None:
        """if statements are recognized but not parsed."""
        self._report(create_unsupported_error("conditional", self.tokens.peek()))
        return None


def parse_string(source: str, filename: str = "<string>",
                 lookahead: int = DEFAULT_LOOKAHEAD) -> Tuple[Optional[Module], List[str]]:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        lookahead: Lookahead depth for the parser

    Returns:
        (module or None, error messages)
    """
    parser = Parser(Lexer(source, filename), lookahead)
    return parser.parse()


def parse_file(filepath: str,
               lookahead: int = DEFAULT_LOOKAHEAD) -> Tuple[Optional[Module], List[str]]:
    """
    Convenience function to parse a source file.

    The file is read as bytes, so undecodable input is reported as a parse
    error at its exact position.

    Raises:
        OSError: If file cannot be read
    """
    with open(filepath, "rb") as f:
        source = f.read()

    parser = Parser(Lexer(source, filepath), lookahead)
    return parser.parse()
