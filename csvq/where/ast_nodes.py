"""
AST (Abstract Syntax Tree) node definitions for WHERE expressions

A parsed WHERE clause is a small boolean expression tree:
leaves are Conditions, inner nodes join two subtrees with AND/OR.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union


class CompareOp(Enum):
    """Comparison operators understood in a condition"""

    CONTAINS = "contains"  # case-insensitive substring match
    EQUALS = "="  # case-insensitive equality
    NOT_EQUALS = "!="  # case-insensitive inequality
    GREATER = ">"
    LESS = "<"
    GREATER_EQ = ">="
    LESS_EQ = "<="

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_OPERATORS


NUMERIC_OPERATORS = frozenset(
    {CompareOp.GREATER, CompareOp.LESS, CompareOp.GREATER_EQ, CompareOp.LESS_EQ}
)


class LogicOp(Enum):
    """Logical operators joining two expressions"""

    AND = "AND"
    OR = "OR"


@dataclass
class Condition:
    """
    A single comparison: column operator value

    column_index stays None until the resolver binds the column name
    to a header position.
    """

    column_name: str
    operator: CompareOp
    value: str
    column_index: Optional[int] = None

    @property
    def is_numeric(self) -> bool:
        return self.operator.is_numeric

    @property
    def is_resolved(self) -> bool:
        return self.column_index is not None

    def __repr__(self) -> str:
        return f"{self.column_name} {self.operator.value} {self.value}"


@dataclass
class ConditionNode:
    """Leaf node wrapping one Condition"""

    condition: Condition

    def __repr__(self) -> str:
        return repr(self.condition)


@dataclass
class LogicNode:
    """Inner node: left AND/OR right"""

    op: LogicOp
    left: "Node"
    right: "Node"

    def __repr__(self) -> str:
        return f"({self.left!r} {self.op.value} {self.right!r})"


Node = Union[ConditionNode, LogicNode]


def iter_conditions(node: Optional[Node]):
    """Yield every Condition in the tree, left to right"""
    if node is None:
        return
    if isinstance(node, LogicNode):
        yield from iter_conditions(node.left)
        yield from iter_conditions(node.right)
    else:
        yield node.condition


@dataclass
class WhereFilter:
    """
    A parsed WHERE clause

    A root of None means no filter: every row passes.
    """

    root: Optional[Node] = None

    @property
    def conditions(self) -> List[Condition]:
        return list(iter_conditions(self.root))

    def explain(self, indent: int = 0) -> List[str]:
        """Render the expression tree, one node per line"""
        if self.root is None:
            return [" " * indent + "(no filter)"]
        return _explain_node(self.root, indent)

    def __repr__(self) -> str:
        return repr(self.root) if self.root is not None else ""


def _explain_node(node: Node, indent: int) -> List[str]:
    pad = " " * indent
    if isinstance(node, LogicNode):
        lines = [pad + node.op.value]
        lines.extend(_explain_node(node.left, indent + 2))
        lines.extend(_explain_node(node.right, indent + 2))
        return lines

    cond = node.condition
    where = f"#{cond.column_index}" if cond.is_resolved else "unresolved"
    kind = "numeric" if cond.is_numeric else "text"
    return [pad + f"Condition({cond!r}) [{where}, {kind}]"]
