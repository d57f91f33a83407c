"""
csvq CLI - Query and format delimited text files

Usage:
    csvq query <file> [options]   # filter, sort, select and convert
    csvq view <file> [options]    # pretty-print a table
"""

import sys
import time
import warnings
from contextlib import contextmanager
from typing import Optional

import click

from csvq import __version__
from csvq.cli.formatters import FORMATS, format_for_path, get_formatter
from csvq.cli.formatters.table import TableFormatter
from csvq.core.options import QueryOptions
from csvq.core.query import query as query_fn
from csvq.where.parser import ParseError

# Rendering width when stdout is not a terminal, so piped tables never wrap
PIPE_WIDTH = 4096


@contextmanager
def report_warnings():
    """Echo library warnings to stderr as 'Warning: ...' lines"""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            yield
        finally:
            for w in caught:
                click.echo(f"Warning: {w.message}", err=True)


def reader_options(f):
    """Options shared by every command that loads a table"""
    decorators = [
        click.option(
            "--header/--no-header",
            "-h",
            default=True,
            help="The first row is a header (default: yes)",
        ),
        click.option(
            "--skip-header",
            "-s",
            is_flag=True,
            help="Skip the first row; it is neither shown nor used as header",
        ),
        click.option(
            "--delimiter",
            "-d",
            type=str,
            default=None,
            help="Field delimiter; use '\\t' for tab (default: ',' or tab for .tsv)",
        ),
        click.option(
            "--comment",
            "-c",
            type=str,
            default="#",
            show_default=True,
            help="Comment character; lines starting with it are ignored",
        ),
        click.option(
            "--hide",
            "-H",
            type=str,
            default=None,
            help="Comma-separated column indices to hide (e.g., 0,2,5)",
        ),
        click.option(
            "--filter",
            "-f",
            "pattern",
            type=str,
            default=None,
            help="Show only rows containing this text (case-insensitive)",
        ),
        click.option(
            "--color",
            "-C",
            is_flag=True,
            help="Use a different text color for each column",
        ),
        click.option(
            "--bgcolor",
            "-G",
            is_flag=True,
            help="Alternate row background colors",
        ),
        click.option(
            "--no-color",
            is_flag=True,
            help="Disable colored output",
        ),
    ]
    for decorator in reversed(decorators):
        f = decorator(f)
    return f


def _load(file: str, options: QueryOptions, header: bool, skip_header: bool, delimiter, comment):
    return query_fn(
        file,
        options,
        delimiter=delimiter,
        comment=comment or None,
        has_header=header,
        skip_header=skip_header,
    )


def _table_kwargs(color: bool, bgcolor: bool, no_color: bool, show_footer: bool = True) -> dict:
    is_tty = sys.stdout.isatty()
    return {
        "no_color": no_color or not is_tty,
        "colors": color,
        "zebra": bgcolor,
        "show_footer": show_footer,
        "width": None if is_tty else PIPE_WIDTH,
    }


@click.group()
@click.version_option(version=__version__, prog_name="csvq")
def cli():
    """
    csvq - Query and format CSV files

    Load a delimited text table, filter it with a WHERE expression,
    sort and reshape it, and print it in several formats.
    """


@cli.command()
@click.argument("file", type=str)
@reader_options
@click.option(
    "--where",
    "-w",
    type=str,
    default=None,
    help="Filter rows with a condition (e.g., 'age > 25', 'name contains John', "
    "'(age > 25 OR status = active) AND active = true')",
)
@click.option(
    "--strict-where",
    is_flag=True,
    help="Fail if the where clause cannot be parsed instead of ignoring it",
)
@click.option(
    "--select",
    "-S",
    type=str,
    default=None,
    help="Select and order columns (e.g., 'name,age' or '0,2,1')",
)
@click.option("--sort", "-B", type=str, default=None, help="Sort by column name or index")
@click.option("--desc", "-D", is_flag=True, help="Sort in descending order")
@click.option(
    "--output",
    "-o",
    "output_format",
    type=click.Choice(FORMATS, case_sensitive=False),
    default=None,
    help="Output format (default: table, or inferred from --out-file)",
)
@click.option(
    "--out-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write output to file instead of stdout",
)
@click.option("--limit", "-n", type=click.IntRange(min=0), default=None, help="Display at most N rows")
@click.option("--explain", is_flag=True, help="Show the execution plan instead of results")
@click.option("--time", "-t", "show_time", is_flag=True, help="Show processing time")
@click.option(
    "--interactive",
    "-i",
    is_flag=True,
    help="Force interactive mode (scrollable table viewer)",
)
@click.option(
    "--no-interactive",
    is_flag=True,
    help="Disable auto-detection of interactive mode",
)
def query(
    file: str,
    header: bool,
    skip_header: bool,
    delimiter: Optional[str],
    comment: str,
    hide: Optional[str],
    pattern: Optional[str],
    color: bool,
    bgcolor: bool,
    no_color: bool,
    where: Optional[str],
    strict_where: bool,
    select: Optional[str],
    sort: Optional[str],
    desc: bool,
    output_format: Optional[str],
    out_file: Optional[str],
    limit: Optional[int],
    explain: bool,
    show_time: bool,
    interactive: bool,
    no_interactive: bool,
):
    """
    Query a CSV file

    Examples:

        \b
        # Rows where age is above 25
        $ csvq query data.csv -w "age > 25"

        \b
        # Grouped conditions, JSON output
        $ csvq query data.csv -w "(age > 25 OR status = active) AND city = NYC" -o json

        \b
        # Pick and reorder columns, sort by age descending
        $ csvq query data.csv -S name,age -B age -D

        \b
        # Tab-separated input, Markdown file output
        $ csvq query data.tsv -d '\\t' --out-file report.md
    """
    start_time = time.time()

    options = QueryOptions(
        where=where,
        pattern=pattern,
        hide=hide,
        select=select,
        sort=sort,
        descending=desc,
        limit=limit,
        strict_where=strict_where,
    )

    try:
        with report_warnings():
            q = _load(file, options, header, skip_header, delimiter, comment)

            if explain:
                click.echo(q.explain())
                return

            result = q.execute()

        fmt = output_format or (format_for_path(out_file) if out_file else "table")

        from csvq.cli.interactive import launch_interactive, should_use_interactive

        if should_use_interactive(
            result,
            force=interactive,
            no_interactive=no_interactive,
            output_file=out_file,
            fmt=fmt,
        ):
            launch_interactive(result, title=f"csvq - {file}")
            return

        formatter = get_formatter(fmt)
        output_text = formatter.format(
            result, **_table_kwargs(color, bgcolor, no_color, show_footer=not out_file)
        )

        if out_file:
            with open(out_file, "w", encoding="utf-8") as f:
                f.write(output_text + "\n")
            click.echo(f"Results written to {out_file} ({formatter.get_name()} format)", err=True)
        else:
            click.echo(output_text)

        if show_time:
            elapsed = time.time() - start_time
            click.echo(
                f"Processed {result.total_rows} rows, {result.matched_rows} matched in {elapsed:.3f}s",
                err=True,
            )

    except ParseError as e:
        click.echo(f"Error: Invalid where clause - {e}", err=True)
        sys.exit(2)
    except FileNotFoundError as e:
        click.echo(f"Error: File not found - {e}", err=True)
        sys.exit(1)
    except ImportError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("file", type=str)
@reader_options
def view(
    file: str,
    header: bool,
    skip_header: bool,
    delimiter: Optional[str],
    comment: str,
    hide: Optional[str],
    pattern: Optional[str],
    color: bool,
    bgcolor: bool,
    no_color: bool,
):
    """
    Pretty-print a CSV file as a table

    Examples:

        \b
        $ csvq view data.csv
        $ csvq view data.csv -C -H 0,3
        $ csvq view data.csv --no-header -f smith
    """
    options = QueryOptions(pattern=pattern, hide=hide)

    try:
        with report_warnings():
            result = _load(file, options, header, skip_header, delimiter, comment).execute()
        click.echo(TableFormatter().format(result, **_table_kwargs(color, bgcolor, no_color)))
    except FileNotFoundError as e:
        click.echo(f"Error: File not found - {e}", err=True)
        sys.exit(1)
    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
