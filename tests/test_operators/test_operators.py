"""
Tests for row operators
"""

from csvq.operators.filter import Filter, row_contains
from csvq.operators.limit import Limit
from csvq.operators.orderby import OrderByOperator, compare_values
from csvq.operators.project import Project, project_row
from csvq.operators.scan import Scan
from csvq.readers.base import Table
from csvq.where.parser import parse
from csvq.where.resolver import resolve


def make_scan(rows, header=None):
    return Scan(Table(header=header, rows=rows))


class TestScan:
    """Test leaf operator"""

    def test_yields_rows(self, sample_table):
        assert list(Scan(sample_table)) == sample_table.rows

    def test_repr(self, sample_table):
        assert repr(Scan(sample_table)) == "Scan(4 rows)"


class TestFilter:
    """Test substring and WHERE filtering"""

    def test_row_contains(self):
        assert row_contains(["Alice", "NYC"], "nyc") is True
        assert row_contains(["Alice", None], "bob") is False
        assert row_contains(["x"], None) is True
        assert row_contains(["x"], "") is True

    def test_pattern_only(self, sample_table):
        rows = list(Filter(Scan(sample_table), pattern="nyc"))

        assert [r[0] for r in rows] == ["Alice", "Diana"]

    def test_where_only(self, sample_table):
        where = parse("age >= 30")
        resolve(where.root, sample_table.header)

        rows = list(Filter(Scan(sample_table), where=where))

        assert [r[0] for r in rows] == ["Alice", "Charlie"]

    def test_pattern_and_where(self, sample_table):
        """Test both filters must pass"""
        where = parse("status = active")
        resolve(where.root, sample_table.header)

        rows = list(Filter(Scan(sample_table), where=where, pattern="nyc"))

        assert [r[0] for r in rows] == ["Alice"]

    def test_no_filters(self, sample_table):
        assert len(list(Filter(Scan(sample_table)))) == 4

    def test_explain(self, sample_table):
        where = parse("age > 1")
        resolve(where.root, sample_table.header)

        lines = Filter(Scan(sample_table), where=where, pattern="x").explain()

        assert lines[0] == "Filter(contains 'x', where age > 1)"
        assert lines[1] == "    Condition(age > 1) [#1, numeric]"
        assert lines[2] == "  Scan(4 rows)"


class TestOrderBy:
    """Test sorting"""

    def test_compare_numbers(self):
        assert compare_values("9", "10") < 0
        assert compare_values("10", "10.0") == 0

    def test_compare_text(self):
        assert compare_values("apple", "Banana") < 0
        assert compare_values("b", "B") == 0

    def test_compare_mixed_falls_back_to_text(self):
        assert compare_values("10", "abc") < 0
        assert compare_values("", "5") < 0

    def test_numeric_ascending(self):
        rows = [["10"], ["9"], ["100"]]

        assert list(OrderByOperator(make_scan(rows), 0)) == [["9"], ["10"], ["100"]]

    def test_descending(self):
        rows = [["b"], ["C"], ["a"]]

        assert list(OrderByOperator(make_scan(rows), 0, descending=True)) == [["C"], ["b"], ["a"]]

    def test_stable(self):
        """Test equal keys keep file order"""
        rows = [["1", "first"], ["0", "x"], ["1", "second"]]

        result = list(OrderByOperator(make_scan(rows), 0))

        assert [r[1] for r in result] == ["x", "first", "second"]

    def test_short_rows_sort_as_empty(self):
        rows = [["b", "2"], ["a"], ["c", "1"]]

        result = list(OrderByOperator(make_scan(rows), 1))

        assert result[0] == ["a"]

    def test_repr(self):
        assert repr(OrderByOperator(make_scan([]), 2, descending=True)) == "OrderBy(#2 DESC)"


class TestProject:
    """Test column projection"""

    def test_project_row(self):
        assert project_row(["a", "b", "c"], [2, 0]) == ["c", "a"]

    def test_missing_cells_become_none(self):
        assert project_row(["a"], [0, 3]) == ["a", None]

    def test_operator(self):
        rows = [["a", "b", "c"], ["d", "e", "f"]]

        assert list(Project(make_scan(rows), [1])) == [["b"], ["e"]]

    def test_repr(self):
        assert repr(Project(make_scan([]), [0, 2])) == "Project(#0, #2)"


class TestLimit:
    """Test row limiting"""

    def test_limit(self):
        rows = [[str(i)] for i in range(10)]

        assert list(Limit(make_scan(rows), 3)) == [["0"], ["1"], ["2"]]

    def test_limit_zero(self):
        assert list(Limit(make_scan([["a"]]), 0)) == []

    def test_limit_larger_than_input(self):
        assert len(list(Limit(make_scan([["a"], ["b"]]), 5))) == 2


class TestPipeline:
    """Test chained operators"""

    def test_explain_chain(self, sample_table):
        plan = Limit(OrderByOperator(Scan(sample_table), 1), 2)

        assert plan.explain() == ["Limit(2)", "  OrderBy(#1 ASC)", "    Scan(4 rows)"]
