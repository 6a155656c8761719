"""
Main entry point for the Organizational Unit handler.

``entrypoint`` is what the orchestrator calls with a raw payload. The click
CLI wraps it for local invocation from a JSON or YAML file.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

import click
import yaml
from pydantic import ValidationError
from tabulate import tabulate

from clients.organizations import OrganizationsClient
from config import Config, get_config
from errors import classify_error, error_message
from models import (
    CREATE_ONLY_PROPERTIES,
    READ_ONLY_PROPERTIES,
    Action,
    HandlerEvent,
    ResourceModel,
)
from progress import HandlerErrorCode, OperationStatus, ProgressEvent
from reconcilers.organizational_unit import OrganizationalUnitReconciler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ClientFactory = Callable[[HandlerEvent, Config], OrganizationsClient]


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def build_client(event: HandlerEvent, config: Config) -> OrganizationsClient:
    """Build the Organizations client for an event's credentials and region."""
    return OrganizationsClient.from_credentials(
        event.credentials, config.aws, region=event.region
    )


async def handle_event(
    event: HandlerEvent,
    config: Optional[Config] = None,
    client_factory: ClientFactory = build_client,
) -> ProgressEvent:
    """
    Handle one parsed event.

    Args:
        event: The parsed handler event.
        config: Configuration; the global config when omitted.
        client_factory: Builds the Organizations client for the event.

    Returns:
        The ProgressEvent produced by the reconciler.
    """
    config = config or get_config()

    try:
        client = client_factory(event, config)
    except Exception as e:
        logger.error(f"Could not create Organizations client: {e}")
        return ProgressEvent.failed(classify_error(e), error_message(e))

    reconciler = OrganizationalUnitReconciler(client, config.handler)
    return await reconciler.dispatch(event.action, event.request, event.callback_context)


def entrypoint(
    payload: Dict[str, Any],
    context: Any = None,
    client_factory: ClientFactory = build_client,
) -> Dict[str, Any]:
    """
    Orchestrator entry point.

    Args:
        payload: Raw invocation payload (local or resource-provider shape).
        context: Runtime context from the hosting environment, unused.
        client_factory: Builds the Organizations client for the event.

    Returns:
        The serialized ProgressEvent. Never raises for bad input or bad
        configuration.
    """
    try:
        config = get_config()
    except ValueError as e:
        configure_logging("INFO")
        logger.error(f"Invalid handler configuration: {e}")
        return ProgressEvent.failed(
            HandlerErrorCode.INTERNAL_FAILURE, f"Invalid handler configuration: {e}"
        ).to_dict()
    configure_logging(config.handler.log_level)

    try:
        event = HandlerEvent.from_payload(payload)
    except ValidationError as e:
        logger.error(f"Invalid handler payload: {e}")
        return ProgressEvent.failed(
            HandlerErrorCode.INVALID_REQUEST, f"Invalid handler payload: {e}"
        ).to_dict()

    progress = asyncio.run(handle_event(event, config, client_factory))
    return progress.to_dict()


def _progress_rows(result: Dict[str, Any]) -> List[List[Any]]:
    rows = [["status", result["status"]]]
    if "errorCode" in result:
        rows.append(["errorCode", result["errorCode"]])
    if "message" in result:
        rows.append(["message", result["message"]])

    models = result.get("resourceModels")
    if models is None:
        models = [result["resourceModel"]] if "resourceModel" in result else []
    for index, model in enumerate(models):
        prefix = f"[{index}] " if "resourceModels" in result else ""
        for key, value in model.items():
            rows.append([f"{prefix}{key}", value])
    return rows


@click.group()
def cli():
    """Organizational Unit handler - invoke lifecycle actions locally"""
    pass


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@click.option(
    "--action",
    "-a",
    type=click.Choice([a.value for a in Action], case_sensitive=False),
    default=None,
    help="Override the payload's action",
)
@click.option("--region", "-r", default=None, help="Override the payload's region")
@click.option(
    "--output", "-o", type=click.Choice(["json", "yaml", "table"]), default="json"
)
def invoke(filename, action, region, output):
    """Invoke the handler with a payload from a YAML/JSON file"""
    with open(filename, "r") as f:
        if filename.endswith(".yaml") or filename.endswith(".yml"):
            payload = yaml.safe_load(f)
        else:
            payload = json.load(f)

    if not isinstance(payload, dict):
        raise click.BadParameter("payload must be a mapping", param_hint="FILENAME")

    if action:
        payload["action"] = action.upper()
    if region:
        payload["region"] = region

    result = entrypoint(payload)

    if output == "yaml":
        click.echo(yaml.dump(result, default_flow_style=False))
    elif output == "table":
        click.echo(tabulate(_progress_rows(result), headers=["Field", "Value"], tablefmt="grid"))
    else:
        click.echo(json.dumps(result, indent=2))

    if result["status"] == OperationStatus.FAILED.value:
        sys.exit(1)


@cli.command()
def schema():
    """Show the resource's properties and their mutability"""
    rows = []
    for name, field in ResourceModel.model_fields.items():
        if field.alias in READ_ONLY_PROPERTIES:
            mutability = "read-only"
        elif field.alias in CREATE_ONLY_PROPERTIES:
            mutability = "create-only"
        else:
            mutability = "mutable"
        rows.append([field.alias, name, mutability, field.description or ""])

    click.echo(f"Type: {get_config().handler.type_name}")
    click.echo(
        tabulate(
            rows,
            headers=["Property", "Attribute", "Mutability", "Description"],
            tablefmt="grid",
        )
    )


if __name__ == "__main__":
    cli()
