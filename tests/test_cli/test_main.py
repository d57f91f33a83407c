"""
Tests for CLI main commands
"""

import json

import pytest
from click.testing import CliRunner

from csvq.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestQueryCommand:
    """Test query command"""

    def test_query_basic(self, runner, sample_csv):
        """Test printing a whole file"""
        result = runner.invoke(cli, ["query", str(sample_csv)])

        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Diana" in result.output
        assert "4 rows" in result.output

    def test_query_with_where(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-w", "age > 25"])

        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Charlie" in result.output
        assert "Bob" not in result.output  # age=25, not > 25
        assert "Diana" not in result.output  # age is not a number
        assert "matched 2 of 4" in result.output

    def test_grouped_where(self, runner, sample_csv):
        result = runner.invoke(
            cli,
            ["query", str(sample_csv), "-w", "(age > 32 OR city = nyc) AND status != pending", "-o", "csv"],
        )

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "name,age,city,status",
            "Alice,30,NYC,active",
            "Charlie,35,SF,active",
        ]

    def test_json_format(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-S", "name", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0] == {"name": "Alice"}
        assert len(data) == 4

    def test_format_alias(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-o", "md", "-n", "1"])

        assert result.exit_code == 0
        assert result.output.startswith("| name | age | city | status |")
        assert "Alice" in result.output
        assert "Bob" not in result.output

    def test_unknown_format(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-o", "yaml"])

        assert result.exit_code != 0

    def test_filter_pattern(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-f", "nyc", "-o", "csv"])

        assert result.exit_code == 0
        assert result.output.splitlines()[1:] == ["Alice,30,NYC,active", "Diana,abc,NYC,pending"]

    def test_sort_desc_and_hide(self, runner, sample_csv):
        result = runner.invoke(
            cli, ["query", str(sample_csv), "-B", "age", "-D", "-H", "2,3", "-o", "csv", "-w", "age > 0"]
        )

        assert result.exit_code == 0
        assert result.output.splitlines() == ["name,age", "Charlie,35", "Alice,30", "Bob,25"]

    def test_no_header(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "--no-header", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["field_0"] == "name"
        assert len(data) == 5

    def test_header_short_flag(self, runner, sample_csv):
        """Test -h turns the header back on"""
        result = runner.invoke(cli, ["query", str(sample_csv), "--no-header", "-h", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["name"] == "Alice"
        assert len(data) == 4

    def test_skip_header(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-s", "-o", "csv"])

        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "Alice,30,NYC,active"

    def test_tab_delimiter(self, runner, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("a\tb\n1\t2\n3\t4\n")

        result = runner.invoke(cli, ["query", str(path), "-d", "\\t", "-w", "a = 3", "-o", "csv"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["a,b", "3,4"]

    def test_missing_column_warning(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-w", "salary > 10"])

        assert result.exit_code == 0
        assert "Warning: Column 'salary' in where clause not found in header" in result.output
        assert "No results found." in result.output

    def test_invalid_where_ignored(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-w", "(age > 1", "-o", "csv"])

        assert result.exit_code == 0
        assert "where clause ignored" in result.output
        assert "Diana,abc,NYC,pending" in result.output

    def test_invalid_where_strict(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-w", "age", "--strict-where"])

        assert result.exit_code == 2
        assert "Invalid where clause" in result.output

    def test_file_not_found(self, runner, tmp_path):
        result = runner.invoke(cli, ["query", str(tmp_path / "missing.csv")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_empty_file(self, runner, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")

        result = runner.invoke(cli, ["query", str(path)])

        assert result.exit_code == 1
        assert "No rows" in result.output

    def test_explain(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-w", "age > 25", "--explain"])

        assert result.exit_code == 0
        assert "Filter(where age > 25)" in result.output
        assert "Condition(age > 25) [#1, numeric]" in result.output
        assert "Alice" not in result.output

    def test_out_file_infers_format(self, runner, sample_csv, tmp_path):
        out = tmp_path / "result.json"

        result = runner.invoke(cli, ["query", str(sample_csv), "-w", "city = la", "--out-file", str(out)])

        assert result.exit_code == 0
        assert "Results written to" in result.output
        assert json.loads(out.read_text()) == [
            {"name": "Bob", "age": "25", "city": "LA", "status": "inactive"}
        ]

    def test_out_file_explicit_format(self, runner, sample_csv, tmp_path):
        out = tmp_path / "result.txt"

        result = runner.invoke(cli, ["query", str(sample_csv), "-o", "html", "--out-file", str(out)])

        assert result.exit_code == 0
        assert out.read_text().startswith("<table>")

    def test_time(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-t", "-o", "csv"])

        assert result.exit_code == 0
        assert "Processed 4 rows" in result.output

    def test_piped_output_has_no_color(self, runner, sample_csv):
        result = runner.invoke(cli, ["query", str(sample_csv), "-C", "-G"])

        assert result.exit_code == 0
        assert "\x1b[" not in result.output


class TestViewCommand:
    """Test view command"""

    def test_view(self, runner, sample_csv):
        result = runner.invoke(cli, ["view", str(sample_csv)])

        assert result.exit_code == 0
        assert "Charlie" in result.output
        assert "status" in result.output

    def test_view_filter_and_hide(self, runner, sample_csv):
        result = runner.invoke(cli, ["view", str(sample_csv), "-f", "sf", "-H", "0"])

        assert result.exit_code == 0
        assert "Charlie" not in result.output
        assert "35" in result.output
        assert "Alice" not in result.output

    def test_view_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["view", str(tmp_path / "nope.csv")])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
