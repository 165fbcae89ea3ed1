"""
Per-table read accessors.

An accessor issues equality-filtered, ordered reads against one prefixed
table and returns typed rows. QueryService builds its curated operations on
these, and exposes them so callers can run their own reads against the same
tables without touching this layer.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, Union

from sqlalchemy import ColumnElement, Select, Table, select
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

from wpquery.errors import QueryValidationError

logger = logging.getLogger(__name__)

Row = Union[SQLModel, Dict[str, Any]]

# Filter values of these types become IN (...) instead of =
_MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


class TableAccessor:
    def __init__(self, engine: AsyncEngine, table: Table, row_model: Optional[Type[SQLModel]] = None):
        self.engine = engine
        self.table = table
        self.row_model = row_model

    def _column(self, key: str):
        try:
            return self.table.c[key]
        except KeyError:
            raise QueryValidationError(f"Unknown column {key!r} on {self.table.name}") from None

    def statement(
        self,
        *criteria: ColumnElement,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Select:
        """
        Build a SELECT over the whole row.

        Keyword filters are ANDed equality tests; a list/tuple/set value means
        IN. ``criteria`` are extra SQLAlchemy expressions for anything else.
        Rows come back ordered by ``order_by`` (column keys, ascending), then
        by primary key, so results are deterministic.
        """
        stmt = select(self.table)
        for key, value in filters.items():
            column = self._column(key)
            if isinstance(value, _MULTI_VALUE_TYPES):
                stmt = stmt.where(column.in_(sorted(value) if isinstance(value, (set, frozenset)) else list(value)))
            else:
                stmt = stmt.where(column == value)
        if criteria:
            stmt = stmt.where(*criteria)

        ordering = [self._column(key) for key in (order_by or ())]
        ordered_keys = {col.key for col in ordering}
        ordering.extend(col for col in self.table.primary_key.columns if col.key not in ordered_keys)
        stmt = stmt.order_by(*ordering)
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    def _to_row(self, raw) -> Row:
        # Columns may carry a key that differs from their SQL name (posts.ID -> id)
        data = {col.key: raw._mapping[col] for col in self.table.c}
        if self.row_model is None:
            return data
        return self.row_model.model_validate(data)

    async def find(
        self,
        *criteria: ColumnElement,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> List[Row]:
        for value in filters.values():
            # Empty IN () can never match; skip the round trip
            if isinstance(value, _MULTI_VALUE_TYPES) and not value:
                return []
        stmt = self.statement(*criteria, order_by=order_by, limit=limit, **filters)
        async with self.engine.connect() as conn:
            result = await conn.execute(stmt)
            rows = result.all()
        logger.debug("%s: %d row(s) for %s", self.table.name, len(rows), filters)
        return [self._to_row(raw) for raw in rows]

    async def find_one(
        self,
        *criteria: ColumnElement,
        order_by: Optional[Sequence[str]] = None,
        **filters: Any,
    ) -> Optional[Row]:
        """First matching row in (order_by, primary key) order, or None."""
        rows = await self.find(*criteria, order_by=order_by, limit=1, **filters)
        return rows[0] if rows else None


def build_accessors(engine: AsyncEngine, tables: Dict[str, Table], row_models: Dict[str, Any]) -> Dict[str, TableAccessor]:
    return {name: TableAccessor(engine, table, row_models.get(name)) for name, table in tables.items()}


def group_by(rows: Iterable[Row], attribute: str) -> Dict[Any, List[Row]]:
    """Group typed rows by one attribute, preserving row order within groups."""
    groups: Dict[Any, List[Row]] = {}
    for row in rows:
        key = row[attribute] if isinstance(row, dict) else getattr(row, attribute)
        groups.setdefault(key, []).append(row)
    return groups
