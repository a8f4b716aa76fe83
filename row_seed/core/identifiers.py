"""SQL identifier validation.

Entity types and field names come from blueprints and end up as table and
column names in generated SQL. Values are always bound as parameters; only
identifiers are interpolated, and only after passing these checks.
"""

from __future__ import annotations

import re

from row_seed.core.exceptions import AdapterError, IdentifierError

# Plain identifiers only: no quotes, dots, whitespace or comment syntax
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_identifier(name: str) -> bool:
    """Check if *name* is a plain SQL identifier."""
    return bool(_IDENTIFIER.match(name))


def quote_identifier(name: str) -> str:
    """Validate *name* and return it double-quoted.

    Raises:
        IdentifierError: If *name* is not a plain identifier.
    """
    if not is_identifier(name):
        raise IdentifierError(name)
    return f'"{name}"'


def bind_marker(name: str, paramstyle: str = "named") -> str:
    """Return the placeholder for parameter *name* in the driver's *paramstyle*."""
    if paramstyle == "named":
        return f":{name}"
    if paramstyle == "pyformat":
        return f"%({name})s"
    raise AdapterError(f"Unsupported paramstyle: {paramstyle}")


def insert_statement(
    table: str, columns: list[str], paramstyle: str = "named"
) -> tuple[str, list[str]]:
    """Build a parameterized INSERT for *table*.

    Parameters are named ``p0, p1, ...`` so that column names never leak
    into the parameter syntax.

    Returns:
        The SQL text and the parameter names, aligned with *columns*.
    """
    quoted_table = quote_identifier(table)
    if not columns:
        return f"INSERT INTO {quoted_table} DEFAULT VALUES", []
    quoted_columns = ", ".join(quote_identifier(c) for c in columns)
    param_names = [f"p{i}" for i in range(len(columns))]
    placeholders = ", ".join(bind_marker(name, paramstyle) for name in param_names)
    return f"INSERT INTO {quoted_table} ({quoted_columns}) VALUES ({placeholders})", param_names
