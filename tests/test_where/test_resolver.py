"""
Tests for binding WHERE column names to header positions
"""

import warnings

import pytest

from csvq.where.parser import parse
from csvq.where.resolver import ColumnNotFoundWarning, find_column_by_name, resolve


class TestFindColumnByName:
    """Test header lookup"""

    def test_exact(self):
        assert find_column_by_name(["id", "age"], "age") == 1

    def test_case_insensitive(self):
        assert find_column_by_name(["ID", "Age"], "aGe") == 1

    def test_header_cell_trimmed(self):
        assert find_column_by_name([" id ", "  age"], "age") == 1

    def test_first_duplicate_wins(self):
        assert find_column_by_name(["x", "name", "NAME"], "name") == 1

    def test_not_found(self):
        assert find_column_by_name(["id"], "age") == -1

    def test_no_header(self):
        assert find_column_by_name(None, "age") == -1

    def test_none_cells_skipped(self):
        assert find_column_by_name([None, "age"], "age") == 1


class TestResolve:
    """Test tree resolution"""

    def test_resolves_all_conditions(self):
        where = parse("(Age > 1 OR status = x) AND id != 2")
        resolve(where.root, ["id", "age", "status"])

        assert [c.column_index for c in where.conditions] == [1, 2, 0]

    def test_missing_column_warns(self):
        """Test an unknown column warns and stays unresolved"""
        where = parse("salary > 10")

        with pytest.warns(ColumnNotFoundWarning, match="salary"):
            resolve(where.root, ["id", "age"])

        assert where.conditions[0].column_index is None

    def test_idempotent(self):
        """Test resolving twice changes nothing and does not warn again"""
        where = parse("age > 1 AND status = ok")
        header = ["status", "age"]
        resolve(where.root, header)
        first = [c.column_index for c in where.conditions]

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            resolve(where.root, header)

        assert [c.column_index for c in where.conditions] == first == [1, 0]

    def test_already_resolved_kept(self):
        """Test a resolved condition is not rebound to a different header"""
        where = parse("age > 1")
        resolve(where.root, ["age"])
        resolve(where.root, ["x", "age"])

        assert where.conditions[0].column_index == 0

    def test_no_header_is_noop(self):
        """Test resolution without a header leaves everything unresolved"""
        where = parse("age > 1")

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            resolve(where.root, None)

        assert where.conditions[0].column_index is None

    def test_none_root(self):
        resolve(None, ["a"])

    def test_explain_after_resolution(self):
        where = parse("age > 25")
        resolve(where.root, ["id", "age"])

        assert where.explain() == ["Condition(age > 25) [#1, numeric]"]
