"""
WHERE evaluation

Evaluates conditions and expression trees against a single row.
A row is a sequence of text fields; any field may be None.
Evaluation never raises: anything that cannot be compared is a non-match.
"""

from typing import Optional, Sequence

from csvq.where.ast_nodes import CompareOp, Condition, LogicNode, LogicOp, Node, WhereFilter

Row = Sequence[Optional[str]]


def to_number(text: str) -> Optional[float]:
    """
    Parse text as a decimal number

    The whole string must be a number (surrounding whitespace is allowed).
    Digit-group underscores, accepted by float(), are rejected.

    Returns:
        The float value, or None if text is not a number
    """
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def evaluate_condition(row: Row, condition: Condition) -> bool:
    """
    Evaluate a single condition against a row

    Args:
        row: Row to check
        condition: Condition to evaluate

    Returns:
        True if condition is satisfied
    """
    idx = condition.column_index
    if idx is None or idx >= len(row):
        return False

    field = row[idx]
    if field is None:
        field = ""
    field = field.strip()

    op = condition.operator
    expected = condition.value

    if op is CompareOp.CONTAINS:
        return expected.casefold() in field.casefold()
    if op is CompareOp.EQUALS:
        return field.casefold() == expected.casefold()
    if op is CompareOp.NOT_EQUALS:
        return field.casefold() != expected.casefold()

    # Relational operators compare numerically; non-numbers never match
    left = to_number(field)
    right = to_number(expected)
    if left is None or right is None:
        return False

    if op is CompareOp.GREATER:
        return left > right
    if op is CompareOp.LESS:
        return left < right
    if op is CompareOp.GREATER_EQ:
        return left >= right
    if op is CompareOp.LESS_EQ:
        return left <= right
    return False


def evaluate(row: Row, node: Optional[Node]) -> bool:
    """
    Evaluate an expression tree against a row

    The left child is always evaluated first; AND stops at the first
    False and OR at the first True, so the right child is skipped.
    A missing tree means no filter and matches everything.
    """
    if node is None:
        return True

    if isinstance(node, LogicNode):
        if node.op is LogicOp.AND:
            return evaluate(row, node.left) and evaluate(row, node.right)
        return evaluate(row, node.left) or evaluate(row, node.right)

    return evaluate_condition(row, node.condition)


def matches(row: Row, where: Optional[WhereFilter]) -> bool:
    """Evaluate a complete WhereFilter; None passes every row"""
    if where is None:
        return True
    return evaluate(row, where.root)
