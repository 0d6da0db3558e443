"""
Single-table query helpers shared by the admin services.
"""

from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


def count_rows(supabase: Client, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
    """Exact row count, optionally restricted by equality filters. Fetches no rows."""
    query = supabase.table(table).select("*", count="exact", head=True)
    for column, value in (filters or {}).items():
        query = query.eq(column, value)
    result = query.execute()
    return result.count or 0


def toggle_flag(
    supabase: Client,
    table: str,
    row_id: str,
    column: str,
    submitted_value: Optional[bool] = None,
) -> Optional[bool]:
    """Flip a boolean column on one row and return the new value.

    The stored value is read first and the update only applies while the row
    still holds it, so two admins toggling at once cannot both win. The value
    the browser submitted is only compared for logging. Returns None when
    nothing was written.
    """
    if not row_id:
        logger.warning(f"Ignoring {table}.{column} toggle without a row id")
        return None

    current = supabase.table(table)\
        .select(f"id, {column}")\
        .eq("id", row_id)\
        .limit(1)\
        .execute()
    if not current.data:
        logger.warning(f"Ignoring {table}.{column} toggle for missing row {row_id}")
        return None

    stored = current.data[0].get(column)
    if submitted_value is not None and submitted_value != bool(stored):
        logger.warning(
            f"Stale form for {table} {row_id}: submitted {column}={submitted_value}, stored {bool(stored)}"
        )

    new_value = not bool(stored)
    query = supabase.table(table)\
        .update({column: new_value})\
        .eq("id", row_id)
    if stored is None:
        query = query.is_(column, "null")
    else:
        query = query.eq(column, stored)
    result = query.execute()

    if not result.data:
        logger.warning(f"{table} {row_id} changed while toggling {column}; nothing written")
        return None

    logger.info(f"Set {table}.{column}={new_value} for {row_id}")
    return new_value


def delete_by_id(supabase: Client, table: str, row_id: str) -> int:
    """Delete one row by id; returns the number of rows removed (0 when it did not exist)."""
    if not row_id:
        logger.warning(f"Ignoring {table} delete without a row id")
        return 0
    result = supabase.table(table)\
        .delete()\
        .eq("id", row_id)\
        .execute()
    deleted = len(result.data or [])
    if deleted:
        logger.info(f"Deleted {table} row {row_id}")
    else:
        logger.warning(f"No {table} row {row_id} to delete")
    return deleted
