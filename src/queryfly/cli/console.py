# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Shared Rich console and renderers for CLI output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from queryfly.data.engine import read_field, to_text
from queryfly.data.page import PageInfo

QUERYFLY_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "queryfly": "bold magenta",
    "dim": "dim",
})

console = Console(theme=QUERYFLY_THEME)


def render_items(title: str, items: Sequence[Any], columns: Sequence[str]) -> None:
    """Print *items* as a table with one column per field name."""
    table = Table(title=f"[queryfly]{title}[/queryfly]", border_style="dim")
    for column in columns:
        table.add_column(column, overflow="fold")
    for item in items:
        table.add_row(*(to_text(read_field(item, column)) for column in columns))
    console.print(table)


def render_page_info(page_info: PageInfo, shown: int) -> None:
    parts = [f"[info]{shown}[/info] shown"]
    if page_info.total_count is not None:
        parts.append(f"[info]{page_info.total_count}[/info] total")
    parts.append("more available" if page_info.has_next_page else "last page")
    if page_info.next_cursor:
        parts.append(f"next cursor [info]{page_info.next_cursor}[/info]")
    console.print("  " + " · ".join(parts))


def print_error(message: str) -> None:
    console.print(f"[error]Error:[/error] {escape(message)}")
