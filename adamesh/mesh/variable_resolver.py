"""
Resolver of the variable language used by the native mesh format.

    # comment to the end of the line
    a = 1.5
    b = -2e-3
    corner = [a, b]
    vertices = [[0, 0], [a, 0], corner, [-a, b]]
    elements = [[0, 1, 2, "Steel"]]

A value is a number, a string, a previously defined variable (optionally
negated) or a bracketed list of values. Lists may nest; empty entries
between commas are ignored. Variables must be defined before they are used.
"""
import re
from typing import Dict, Any, List, Optional

from ..errors import ParseError, UndefinedVariableError, VariableTypeError


class ListValue(list):
    """A list remembering the line it starts on."""
    def __init__(self, items=(), lineno: Optional[int]=None):
        super().__init__(items)
        self.lineno = lineno


TOKEN = re.compile(r'''
    (?P<comment>\#[^\n]*)
  | (?P<newline>\n)
  | (?P<space>[ \t\r]+)
  | (?P<number>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?)
  | (?P<string>"[^"\n]*"|'[^'\n]*')
  | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<op>[=\[\]{},;+-])
  | (?P<error>.)
''', re.VERBOSE)

CLOSING = {'[': ']', '{': '}'}


def is_scalar(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class VariableResolver:
    """
    Parses a whole text into a dictionary of resolved variables.

    Parameters:
        filename (str, optional): Used in error positions only.
    """
    def __init__(self, filename: Optional[str]=None):
        self.filename = filename
        self.variables: Dict[str, Any] = {}
        self.lines: Dict[str, int] = {}

    def tokenize(self, text: str):
        lineno = 1
        tokens = []
        for m in TOKEN.finditer(text):
            kind = m.lastgroup
            value = m.group()
            if kind == 'newline':
                lineno += 1
            elif kind in ('comment', 'space'):
                continue
            elif kind == 'error':
                raise ParseError(f"unexpected character {value!r}", self.filename, lineno)
            else:
                tokens.append((kind, value, lineno))
        tokens.append(('end', '', lineno))
        return tokens

    def parse(self, text: str) -> Dict[str, Any]:
        self._tokens = self.tokenize(text)
        self._pos = 0
        while self._peek()[0] != 'end':
            kind, name, lineno = self._next()
            if kind == 'op' and name == ';':
                continue
            if kind != 'name':
                raise ParseError(f"expected a variable name, got {name!r}",
                                 self.filename, lineno)
            self._expect('=')
            self.variables[name] = self._value()
            self.lines[name] = lineno
        return self.variables

    def _peek(self):
        return self._tokens[self._pos]

    def _next(self):
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _expect(self, op: str):
        kind, value, lineno = self._next()
        if kind != 'op' or value != op:
            shown = value if kind != 'end' else 'end of file'
            raise ParseError(f"expected {op!r}, got {shown!r}", self.filename, lineno)

    def _value(self):
        kind, value, lineno = self._next()
        if kind == 'number':
            return self._number(value)
        if kind == 'string':
            return value[1:-1]
        if kind == 'name':
            return self._lookup(value, lineno)
        if kind == 'op' and value in '+-':
            sign = -1 if value == '-' else 1
            kind, value, lineno = self._next()
            if kind == 'number':
                return sign*self._number(value)
            if kind == 'name':
                v = self._lookup(value, lineno)
                if not is_scalar(v):
                    raise VariableTypeError(
                        f"'{value}' is not a number and can not be negated", lineno)
                return sign*v
            raise ParseError(f"expected a number after {'-' if sign < 0 else '+'}",
                             self.filename, lineno)
        if kind == 'op' and value in CLOSING:
            return self._list(CLOSING[value], lineno)
        shown = value if kind != 'end' else 'end of file'
        raise ParseError(f"expected a value, got {shown!r}", self.filename, lineno)

    def _list(self, closing: str, lineno: int) -> ListValue:
        items = ListValue(lineno=lineno)
        while True:
            kind, value, _ = self._peek()
            if kind == 'op' and value == closing:
                self._next()
                return items
            if kind == 'op' and value == ',':
                self._next()
                continue
            if kind == 'end':
                raise ParseError(f"missing {closing!r} for the list opened here",
                                 self.filename, lineno)
            items.append(self._value())
            kind, value, l = self._peek()
            if kind == 'end':
                raise ParseError(f"missing {closing!r} for the list opened here",
                                 self.filename, lineno)
            if kind != 'op' or value not in (',', closing):
                raise ParseError(f"expected ',' or {closing!r}, got {value!r}",
                                 self.filename, l)

    @staticmethod
    def _number(text: str):
        if re.fullmatch(r'\d+', text):
            return int(text)
        return float(text)

    def _lookup(self, name: str, lineno: int):
        try:
            return self.variables[name]
        except KeyError:
            raise UndefinedVariableError(name, lineno) from None

    ## Typed access

    def get(self, name: str, default=None):
        return self.variables.get(name, default)

    def scalar(self, name: str):
        value = self._lookup(name, None)
        if not is_scalar(value):
            raise VariableTypeError(f"'{name}' must be a number", self.lines.get(name))
        return value

    def vector(self, name: str) -> List:
        value = self._lookup(name, None)
        if not isinstance(value, list) or not all(is_scalar(v) for v in value):
            raise VariableTypeError(f"'{name}' must be a list of numbers",
                                    self.lines.get(name))
        return value

    def matrix(self, name: str) -> List[List]:
        value = self._lookup(name, None)
        if not isinstance(value, list) or not all(isinstance(v, list) for v in value):
            raise VariableTypeError(f"'{name}' must be a list of lists",
                                    self.lines.get(name))
        return value


def resolve(text: str, filename: Optional[str]=None) -> VariableResolver:
    resolver = VariableResolver(filename)
    resolver.parse(text)
    return resolver
