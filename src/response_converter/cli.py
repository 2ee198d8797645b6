"""
Command line tools for inspecting a class mapping configuration.

Examples:
    response-converter rules --config config/response_builder.yaml
    response-converter check --verify-methods
    response-converter resolve myapp.models.User
"""

import json
import sys
from typing import Optional

import click

from .config import ConfigManager, get_settings
from .exceptions import ConfigurationError
from .logging import setup_logging
from .registry import MappingRegistry, import_class, class_identifier


def _load_registry(config_path: Optional[str], verify_methods: bool) -> MappingRegistry:
    config = ConfigManager(config_path or get_settings().config_path)
    return MappingRegistry.from_config(config, verify_methods=verify_methods)


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Log level",
)
def cli(log_level: str):
    """Response converter - class mapping tools."""
    setup_logging(log_level=log_level, log_format="console", stream=sys.stderr)


@cli.command("rules")
@click.option("--config", "-c", "config_path", help="Path to YAML configuration")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="table",
    help="Output format",
)
def list_rules(config_path: Optional[str], output_format: str):
    """Print the configured class mapping."""
    try:
        registry = _load_registry(config_path, verify_methods=False)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(registry.to_dict(), indent=2))
        return

    if not len(registry):
        click.echo("No classes mapped.")
        return

    width = max(len(identifier) for identifier in registry)
    click.echo(f"{'CLASS':<{width}}  KEY / METHOD")
    for identifier, rule in registry.items():
        click.echo(f"{identifier:<{width}}  {rule.key} / {rule.method}()")


@cli.command("check")
@click.option("--config", "-c", "config_path", help="Path to YAML configuration")
@click.option(
    "--verify-methods",
    is_flag=True,
    default=False,
    help="Import mapped classes and check their accessor methods",
)
def check_config(config_path: Optional[str], verify_methods: bool):
    """Validate the class mapping configuration."""
    try:
        registry = _load_registry(config_path, verify_methods=verify_methods)
    except ConfigurationError as e:
        click.echo(f"Invalid configuration: {e.message}", err=True)
        sys.exit(1)

    click.echo(f"OK: {len(registry)} class mapping(s)")


@cli.command("resolve")
@click.argument("class_path")
@click.option("--config", "-c", "config_path", help="Path to YAML configuration")
def resolve_class(class_path: str, config_path: Optional[str]):
    """Show which rule applies to CLASS_PATH."""
    try:
        registry = _load_registry(config_path, verify_methods=False)
        target = import_class(class_path)
    except (ConfigurationError, ImportError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    rule, origin = registry.resolve_with_origin(target)
    if rule is None or origin is None:
        click.echo(f"{class_path}: no mapping (objects pass through unchanged)")
        sys.exit(1)

    via = "" if origin is target else f" (inherited from {class_identifier(origin)})"
    click.echo(f"{class_path}: key={rule.key} method={rule.method}(){via}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
