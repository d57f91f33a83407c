"""
WHERE Parser - Hand-written recursive descent parser

Parses boolean filter expressions:
- column operator value
- operators: contains, =, !=, >, <, >=, <=
- AND / OR (case-insensitive), AND binds tighter than OR
- parenthesized grouping

A condition is a raw run of text; it ends at a parenthesis, at an
AND/OR keyword preceded by whitespace, or at the end of the input.
Quoted segments ('...' or "...") inside a condition are taken literally.
"""

import re
from typing import Optional, Tuple

from csvq.where.ast_nodes import (
    CompareOp,
    Condition,
    ConditionNode,
    LogicNode,
    LogicOp,
    Node,
    WhereFilter,
)


class ParseError(Exception):
    """Raised when a WHERE expression cannot be parsed"""

    pass


QUOTES = "'\""

# Keyword match at the cursor: AND/OR not followed by an identifier character
_KEYWORDS = {
    "AND": re.compile(r"AND(?!\w)", re.IGNORECASE),
    "OR": re.compile(r"OR(?!\w)", re.IGNORECASE),
}

# Keyword boundary inside a condition run: after whitespace or a closing quote
_BOUNDARY = re.compile(r"\s+(?:AND|OR)(?!\w)", re.IGNORECASE)
_BOUNDARY_AFTER_QUOTE = re.compile(r"(?:AND|OR)(?!\w)", re.IGNORECASE)

# A quote only opens a literal segment where a token starts
_TOKEN_START_AFTER = "=<>!()"

# Operator classes in priority order; inside a class the leftmost match wins.
_OPERATOR_CLASSES = [
    [(re.compile(r"(?<!\w)contains(?!\w)", re.IGNORECASE), CompareOp.CONTAINS)],
    [
        (re.compile(re.escape(op.value)), op)
        for op in (CompareOp.GREATER_EQ, CompareOp.LESS_EQ, CompareOp.NOT_EQUALS)
    ],
    [
        (re.compile(re.escape(op.value)), op)
        for op in (CompareOp.GREATER, CompareOp.LESS, CompareOp.EQUALS)
    ],
]


class WhereParser:
    """
    Recursive descent parser for WHERE expressions

    Grammar:
        expression := term ( OR term )*
        term       := factor ( AND factor )*
        factor     := "(" expression ")" | condition
        condition  := column operator value
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def parse(self) -> WhereFilter:
        """Parse the whole input into a WhereFilter"""
        if not self.text or not self.text.strip():
            raise ParseError("Empty where clause")

        root = self._parse_expression()

        # The entire input must be consumed (modulo trailing whitespace)
        self._skip_whitespace()
        if self.pos < len(self.text):
            rest = self.text[self.pos :]
            if rest.startswith(")"):
                raise ParseError(f"Unmatched ')' at position {self.pos}")
            raise ParseError(f"Unexpected characters at end of where clause: '{rest}'")

        return WhereFilter(root=root)

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek_keyword(self) -> Optional[str]:
        """Return AND/OR if one starts at the cursor (after whitespace)"""
        self._skip_whitespace()
        for name, pattern in _KEYWORDS.items():
            if pattern.match(self.text, self.pos):
                return name
        return None

    def _match(self, token: str) -> bool:
        """
        Consume token if it is next in the input

        Args:
            token: "(", ")", "AND" or "OR"

        Returns:
            True if the token was consumed
        """
        self._skip_whitespace()
        if token in _KEYWORDS:
            m = _KEYWORDS[token].match(self.text, self.pos)
            if not m:
                return False
            self.pos = m.end()
            return True

        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        return False

    def _parse_expression(self) -> Node:
        """expression := term ( OR term )*"""
        left = self._parse_term()

        while self._match("OR"):
            self._expect_operand("OR")
            right = self._parse_term()
            left = LogicNode(op=LogicOp.OR, left=left, right=right)

        return left

    def _parse_term(self) -> Node:
        """term := factor ( AND factor )*"""
        left = self._parse_factor()

        while self._match("AND"):
            self._expect_operand("AND")
            right = self._parse_factor()
            left = LogicNode(op=LogicOp.AND, left=left, right=right)

        return left

    def _expect_operand(self, keyword: str) -> None:
        """Raise if nothing usable follows an AND/OR keyword"""
        self._skip_whitespace()
        if (
            self.pos >= len(self.text)
            or self.text[self.pos] == ")"
            or self._peek_keyword() is not None
        ):
            raise ParseError(f"Missing operand after {keyword}")

    def _parse_factor(self) -> Node:
        """factor := "(" expression ")" | condition"""
        self._skip_whitespace()

        if self._match("("):
            node = self._parse_expression()
            if not self._match(")"):
                raise ParseError(f"Mismatched parentheses: expected ')' at position {self.pos}")
            return node

        keyword = self._peek_keyword()
        if keyword is not None:
            raise ParseError(f"Missing operand before {keyword}")

        start = self.pos
        raw = self._scan_condition()
        if not raw.strip():
            raise ParseError(f"Expected a condition at position {start}")

        return ConditionNode(parse_condition(raw))

    def _scan_condition(self) -> str:
        """Advance over one raw condition and return its text"""
        text = self.text
        start = i = self.pos
        quote = None

        while i < len(text):
            ch = text[i]
            if quote:
                if ch == quote:
                    quote = None
                    if _BOUNDARY_AFTER_QUOTE.match(text, i + 1):
                        i += 1
                        break
            elif _opens_quote(text, i):
                quote = ch
            elif ch in "()":
                break
            elif ch.isspace() and _BOUNDARY.match(text, i):
                break
            i += 1

        if quote:
            raise ParseError(f"Unterminated quote in condition: '{text[start:i].strip()}'")

        self.pos = i
        return text[start:i]


def _opens_quote(text: str, i: int) -> bool:
    """
    True if the quote character at i starts a quoted segment

    Only a quote at the start of a token counts: at the start of the
    text, or after whitespace, a parenthesis or an operator character.
    Anywhere else (O'Brien, 5" screen) it is ordinary text.
    """
    if text[i] not in QUOTES:
        return False
    return i == 0 or text[i - 1].isspace() or text[i - 1] in _TOKEN_START_AFTER


def _mask_quoted(text: str) -> str:
    """Blank out quoted segments so operators inside them are never matched"""
    chars = list(text)
    quote = None
    for i, ch in enumerate(text):
        if quote:
            if ch == quote:
                quote = None
            chars[i] = "\0"
        elif _opens_quote(text, i):
            quote = ch
            chars[i] = "\0"
    if quote:
        raise ParseError(f"Unterminated quote in condition: '{text.strip()}'")
    return "".join(chars)


def _unquote(text: str) -> Tuple[str, bool]:
    """Strip one pair of matching surrounding quotes"""
    if len(text) >= 2 and text[0] in QUOTES and text[-1] == text[0]:
        return text[1:-1], True
    return text, False


def find_operator(text: str) -> Optional[Tuple[int, int, CompareOp]]:
    """
    Locate the operator of a raw condition

    Operator classes are tried longest first (contains, then the
    two-character operators, then the single-character ones) so that
    '>=' is never read as '>' followed by a stray '='. Inside the first
    class with a match, the leftmost occurrence wins.

    Returns:
        (start, end, operator) or None if no operator is present
    """
    masked = _mask_quoted(text)
    for op_class in _OPERATOR_CLASSES:
        best = None
        for pattern, op in op_class:
            m = pattern.search(masked)
            if m and (best is None or m.start() < best[0].start()):
                best = (m, op)
        if best is not None:
            m, op = best
            return m.start(), m.end(), op
    return None


def parse_condition(raw: str) -> Condition:
    """
    Parse a single condition such as "age >= 25" or "name contains 'Jo Ann'"

    Raises:
        ParseError: If no operator is found or the column/value is empty
    """
    text = raw.strip()
    found = find_operator(text)
    if found is None:
        raise ParseError(f"No valid operator in clause: '{text}'")

    start, end, op = found
    column, _ = _unquote(text[:start].strip())
    value_text = text[end:].strip()

    if not column:
        raise ParseError(f"Empty column name in clause: '{text}'")
    if not value_text:
        raise ParseError(f"Missing value in clause: '{text}'")

    value, _ = _unquote(value_text)
    return Condition(column_name=column, operator=op, value=value)


def parse(text: str) -> WhereFilter:
    """
    Convenience function to parse a WHERE expression

    Args:
        text: Expression such as "(age > 25 OR status = active) AND active = true"

    Returns:
        Parsed WhereFilter

    Raises:
        ParseError: If the expression is invalid

    Examples:
        >>> where = parse("age > 25")
        >>> where = parse("name contains John OR city = NYC")
    """
    return WhereParser(text).parse()
