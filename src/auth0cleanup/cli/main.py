"""Click-based CLI for running the cleanup function locally."""

import os
import sys
from types import SimpleNamespace

import click

from ..core.config import check_env_file
from ..core.exceptions import Auth0CleanupError
from ..utils.logging_utils import configure_from_env
from ..utils.rich_utils import (
    get_console,
    install_rich_tracebacks,
    print_http_response,
    print_settings,
)

LOCAL_FUNCTION_NAME = "local-auth0-cleanup"


def build_event(ssoid: str | None, via: str) -> dict:
    """Build an API Gateway style event carrying ``ssoid``.

    With ``via="env"`` the event is empty and the SSOID comes from settings.
    """
    if not ssoid or via == "env":
        return {}
    if via == "path":
        return {"pathParameters": {"ssoid": ssoid}}
    return {"queryStringParameters": {"ssoid": ssoid}}


def _apply_environment(param_prefix: str | None, region: str | None) -> None:
    check_env_file()
    if param_prefix:
        os.environ["PARAM_PREFIX"] = param_prefix
    else:
        os.environ.setdefault("PARAM_PREFIX", "/auth0-cleanup/")
    if region:
        os.environ["AWS_REGION"] = region
    else:
        os.environ.setdefault("AWS_REGION", "us-east-1")
    configure_from_env()


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """auth0-cleanup - delete Auth0 users by SSOID and log them to S3."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--ssoid", help="SSOID to clean up (default: SSOID setting)")
@click.option(
    "--via",
    type=click.Choice(["path", "query", "env"]),
    default="path",
    show_default=True,
    help="Where the SSOID is placed in the event",
)
@click.option(
    "--function-name",
    default=LOCAL_FUNCTION_NAME,
    show_default=True,
    help="Recorded as deleted_by in the ledger",
)
@click.option("--param-prefix", help="SSM path prefix (PARAM_PREFIX)")
@click.option("--region", help="AWS region (AWS_REGION)")
def invoke(
    ssoid: str | None,
    via: str,
    function_name: str,
    param_prefix: str | None,
    region: str | None,
) -> None:
    """Run the Lambda handler once against live Auth0, SSM and S3."""
    _apply_environment(param_prefix, region)
    if via == "env" and ssoid:
        os.environ["SSOID"] = ssoid

    from ..handler import lambda_handler

    context = SimpleNamespace(function_name=function_name)
    response = lambda_handler(build_event(ssoid, via), context)
    print_http_response(response)

    if response["statusCode"] >= 500:
        sys.exit(1)


@cli.command()
@click.option("--param-prefix", help="SSM path prefix (PARAM_PREFIX)")
@click.option("--region", help="AWS region (AWS_REGION)")
@click.option("--test-token", is_flag=True, help="Also request a management token")
def doctor(param_prefix: str | None, region: str | None, test_token: bool) -> None:
    """Resolve settings from SSM and optionally test the Auth0 credentials."""
    _apply_environment(param_prefix, region)

    from ..core.auth import get_management_token
    from ..handler import build_service

    console = get_console()
    try:
        settings = build_service().resolver.resolve()
        print_settings(settings.to_dict(), settings.missing_keys())

        if test_token:
            get_management_token(
                settings.auth0_domain,
                settings.require("AUTH0_CLIENT_ID"),
                settings.require("AUTH0_CLIENT_SECRET"),
                settings.auth0_audience,
            )
            console.print("Access token obtained successfully", style="success")
    except Auth0CleanupError as e:
        console.print(f"Configuration error: {e}", style="error")
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        install_rich_tracebacks()
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
