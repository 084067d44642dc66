"""Pure building blocks composed by the querier: column filtering and SQL assembly."""

from sqlrecord.core.builder import (
    Statement,
    delete_from_query,
    delete_query,
    expand_tail,
    find_all_tail,
    find_tail,
    insert_multi_query,
    insert_query,
    qualified_columns,
    qualified_view,
    select_query,
    update_query,
)
from sqlrecord.core.columns import (
    filtered_column_indexes,
    filtered_columns_and_values,
    filtered_struct_columns_and_values,
    without_index,
)

__all__ = (
    "Statement",
    "delete_from_query",
    "delete_query",
    "expand_tail",
    "filtered_column_indexes",
    "filtered_columns_and_values",
    "filtered_struct_columns_and_values",
    "find_all_tail",
    "find_tail",
    "insert_multi_query",
    "insert_query",
    "qualified_columns",
    "qualified_view",
    "select_query",
    "update_query",
    "without_index",
)
