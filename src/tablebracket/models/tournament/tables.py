"""Physical table pool."""

# Table Bracket
# Copyright (C) 2025  Table Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from tablebracket.constants import DEFAULT_TABLE_COUNT, default_table_name
from tablebracket.exceptions import InvalidConfigurationException, TableNotFoundException
from tablebracket.utils.validation import validate_table_count


@dataclass(frozen=True)
class TableSettings:
    """Settings for one table.

    Attributes
    ----------
    number : int
        1-based table number. Stable for the lifetime of the table.
    name : str
        Display name.
    auto_assign : bool
        Whether automatic assignment may place matches on this table.
    """

    number: int
    name: str
    auto_assign: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"number": self.number, "name": self.name, "auto_assign": self.auto_assign}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableSettings":
        number = data["number"]
        return cls(
            number=number,
            name=data.get("name") or default_table_name(number),
            auto_assign=data.get("auto_assign", True),
        )


@dataclass(frozen=True)
class TablePool:
    """The tables available to the tournament.

    Every edit returns a new pool. Which match sits on a table is not stored
    here; it is read from ``Match.table`` on the bracket.
    """

    tables: Tuple[TableSettings, ...] = field(default_factory=tuple)
    global_auto_assign: bool = True

    @classmethod
    def create(cls, count: int = DEFAULT_TABLE_COUNT, global_auto_assign: bool = True) -> "TablePool":
        """Create a pool of ``count`` tables with default names.

        Raises:
            InvalidConfigurationException: If count is not a positive integer
        """
        count = validate_table_count(count)
        return cls(
            tables=tuple(TableSettings(n, default_table_name(n)) for n in range(1, count + 1)),
            global_auto_assign=global_auto_assign,
        )

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self):
        return iter(self.tables)

    @property
    def numbers(self) -> List[int]:
        return [t.number for t in self.tables]

    def find(self, table_number: int) -> Optional[TableSettings]:
        for table in self.tables:
            if table.number == table_number:
                return table
        return None

    def get(self, table_number: int) -> TableSettings:
        """Get a table by number.

        Raises:
            TableNotFoundException: If the table does not exist
        """
        table = self.find(table_number)
        if table is None:
            raise TableNotFoundException(table_number)
        return table

    def _update(self, table_number: int, **changes) -> "TablePool":
        table = self.get(table_number)
        updated = replace(table, **changes)
        return replace(
            self,
            tables=tuple(updated if t.number == table_number else t for t in self.tables),
        )

    def add_table(self, name: Optional[str] = None) -> "TablePool":
        number = max(self.numbers, default=0) + 1
        table = TableSettings(number, (name or "").strip() or default_table_name(number))
        return replace(self, tables=self.tables + (table,))

    def remove_table(self, table_number: int) -> "TablePool":
        """Remove a table. The last table cannot be removed.

        Raises:
            TableNotFoundException: If the table does not exist
            InvalidConfigurationException: If it is the only table
        """
        self.get(table_number)
        if len(self.tables) == 1:
            raise InvalidConfigurationException("At least one table is required")
        return replace(
            self, tables=tuple(t for t in self.tables if t.number != table_number)
        )

    def resize(self, count: int) -> "TablePool":
        """Grow or shrink to ``count`` tables, dropping the highest numbers first."""
        count = validate_table_count(count)
        pool = self
        while len(pool.tables) < count:
            pool = pool.add_table()
        if len(pool.tables) > count:
            pool = replace(pool, tables=pool.tables[:count])
        return pool

    def rename_table(self, table_number: int, name: str) -> "TablePool":
        name = (name or "").strip()
        if not name:
            raise InvalidConfigurationException("Table name cannot be empty")
        return self._update(table_number, name=name)

    def toggle_auto_assign(self, table_number: int) -> "TablePool":
        return self._update(
            table_number, auto_assign=not self.get(table_number).auto_assign
        )

    def set_global_auto_assign(self, enabled: bool) -> "TablePool":
        return replace(self, global_auto_assign=enabled)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": [t.to_dict() for t in self.tables],
            "global_auto_assign": self.global_auto_assign,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TablePool":
        return cls(
            tables=tuple(TableSettings.from_dict(t) for t in data.get("tables", [])),
            global_auto_assign=data.get("global_auto_assign", True),
        )
