# -*- coding: utf-8 -*-

import json

import click

from zendesk_provider.cli.commands.main import cli_start, console, fail
from zendesk_provider.exceptions.core import UnknownResourceTypeError
from zendesk_provider.provider import new_provider


@cli_start.command()
@click.option(
    "-t",
    "--type",
    "type_name",
    default=None,
    help="Only print the schema of this resource type.",
)
def schema(type_name: str | None) -> None:
    """
    Prints the provider, resource and data source schemas as JSON.
    """
    provider = new_provider()
    if type_name is not None:
        try:
            resource = provider.resource(type_name)
        except UnknownResourceTypeError as e:
            fail(str(e))
        document = {k: v.to_dict() for k, v in resource.schema.items()}
    else:
        document = {
            "provider": {k: v.to_dict() for k, v in provider.schema.items()},
            "resources": {
                name: {k: v.to_dict() for k, v in factory().schema.items()}
                for name, factory in provider.resources_map.items()
            },
            "data_sources": {
                name: {k: v.to_dict() for k, v in factory().schema.items()}
                for name, factory in provider.data_sources_map.items()
            },
        }
    console.print_json(json.dumps(document))
