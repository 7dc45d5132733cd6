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
"""QueryFly CLI: run collection queries against the configured data sources.

Examples::

    queryfly query users --filter userType:eq:LEAD --sort displayName --page-size 10
    queryfly query locations --filter 'state:in:["CA","WA"]' --cursor MTA=
    queryfly count users --filter email:contains:alice
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from queryfly.cli.console import console, print_error, render_items, render_page_info
from queryfly.config.properties.query import QueryProperties
from queryfly.core.config import Config
from queryfly.data.schema import dump_query_spec, parse_query_spec
from queryfly.kernel.exceptions import ValidationException
from queryfly.kernel.result import Result
from queryfly.logging import configure_logging
from queryfly.services import locations, users
from queryfly.services.collection import CollectionService


@dataclass(frozen=True)
class _Collection:
    service: CollectionService[Any]
    columns: tuple[str, ...]


COLLECTIONS: dict[str, _Collection] = {
    "users": _Collection(users.service, ("displayName", "email", "userType", "isAdmin", "phone")),
    "locations": _Collection(locations.service, ("code", "name", "city", "state", "isActive")),
}


def _parse_value(raw: str) -> Any:
    """Interpret a filter value as JSON when it parses, as plain text otherwise."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _parse_filters(raw_filters: tuple[str, ...]) -> list[dict[str, Any]]:
    filters = []
    for raw in raw_filters:
        parts = raw.split(":", 2)
        if len(parts) != 3:
            raise click.BadParameter(f"expected field:op:value, got '{raw}'", param_hint="--filter")
        field, op, value = parts
        filters.append({"field": field, "op": op, "value": _parse_value(value)})
    return filters


def _parse_sorting(raw_sorting: tuple[str, ...]) -> list[dict[str, Any]]:
    sorting = []
    for raw in raw_sorting:
        field, _, direction = raw.partition(":")
        sorting.append({"field": field, "direction": direction or "asc"})
    return sorting


def _unwrap(result: Result[Any]) -> Any:
    if not result.ok:
        print_error(result.error or "Query failed")
        raise SystemExit(1)
    return result.value


class QueryFlyCLI(click.Group):
    """Click group that loads configuration and logging before dispatching a command.

    ``queryfly.yaml`` (or ``config/queryfly.yaml``) in the working directory
    sets the page-size limits; logging stays at WARNING so output is clean.
    """

    def invoke(self, ctx: click.Context) -> Any:
        configure_logging(Config({"queryfly": {"logging": {"level": {"root": "WARNING"}}}}))
        ctx.obj = Config.from_sources(Path.cwd()).bind(QueryProperties)
        return super().invoke(ctx)


@click.group(cls=QueryFlyCLI)
@click.version_option(package_name="queryfly")
def cli() -> None:
    """QueryFly: filter, sort and paginate collections."""


collection_argument = click.argument("collection", type=click.Choice(sorted(COLLECTIONS)))
filter_option = click.option(
    "--filter", "filters", multiple=True, metavar="FIELD:OP:VALUE", help="Filter condition (repeatable)."
)


@cli.command("query")
@collection_argument
@filter_option
@click.option("--sort", "sorting", multiple=True, metavar="FIELD[:asc|desc]", help="Sort key (repeatable).")
@click.option("--page-size", type=int, default=None, help="Items per page (1-100).")
@click.option("--page-index", type=int, default=None, help="Zero-based page for offset pagination.")
@click.option("--cursor", default=None, help="Cursor from a previous page.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_obj
def query_command(
    properties: QueryProperties,
    collection: str,
    filters: tuple[str, ...],
    sorting: tuple[str, ...],
    page_size: int | None,
    page_index: int | None,
    cursor: str | None,
    as_json: bool,
) -> None:
    """Query a collection and print one page of results."""
    pagination: dict[str, Any] = {}
    if page_size is not None:
        pagination["pageSize"] = page_size
    if page_index is not None:
        pagination["pageIndex"] = page_index
    if cursor is not None:
        pagination["cursor"] = cursor

    raw = {"filters": _parse_filters(filters), "sorting": _parse_sorting(sorting), "pagination": pagination}
    try:
        spec = parse_query_spec(raw, properties)
    except ValidationException as exc:
        print_error(str(exc))
        raise SystemExit(2) from exc

    target = COLLECTIONS[collection]
    page = _unwrap(asyncio.run(target.service.query(spec)))

    if as_json:
        info = page.page_info
        click.echo(
            json.dumps(
                {
                    "query": dump_query_spec(spec),
                    "items": list(page.items),
                    "pageInfo": {
                        "hasNextPage": info.has_next_page,
                        "nextCursor": info.next_cursor,
                        "totalCount": info.total_count,
                    },
                },
                default=str,
                indent=2,
            )
        )
        return

    render_items(collection.capitalize(), page.items, target.columns)
    render_page_info(page.page_info, len(page.items))


@cli.command("count")
@collection_argument
@filter_option
@click.pass_obj
def count_command(properties: QueryProperties, collection: str, filters: tuple[str, ...]) -> None:
    """Count the items in a collection matching the filters."""
    try:
        spec = parse_query_spec({"filters": _parse_filters(filters), "pagination": {}}, properties)
    except ValidationException as exc:
        print_error(str(exc))
        raise SystemExit(2) from exc

    count = _unwrap(asyncio.run(COLLECTIONS[collection].service.get_count(spec.filters)))
    console.print(f"[success]{count}[/success]")


@cli.command("get")
@collection_argument
@click.argument("id")
def get_command(collection: str, id: str) -> None:
    """Show a single item by id."""
    item = _unwrap(asyncio.run(COLLECTIONS[collection].service.get_by_id(id)))
    if item is None:
        console.print(f"[warning]No {collection} item with id {id}[/warning]")
        raise SystemExit(1)
    click.echo(json.dumps(item, default=str, indent=2))
