"""CLI for the Vault secret bridge."""

import json

import click
from dotenv import load_dotenv

from vaultbridge.utils.logging import setup_logging

load_dotenv()


@click.group()
@click.version_option(version="1.0.0", prog_name="vaultbridge")
@click.option("--log-level", default="WARNING", help="Log level (DEBUG/INFO/WARNING)")
@click.option("--log-format", type=click.Choice(["standard", "json"]), default="standard")
def cli(log_level: str, log_format: str):
    """Vault secret bridge - turn secret backends into property overlays."""
    setup_logging(level=log_level, format_style=log_format)


@cli.command()
@click.option("--config-dir", "-c", default="config", help="Directory holding bridge.yaml")
@click.option("--environment", "-e", default=None, help="Environment (dev/prod)")
def backends(config_dir: str, environment: str):
    """List configured secret backends."""
    from vaultbridge.config.loader import ConfigLoader, build_registry

    loader = ConfigLoader(config_dir)
    descriptors = loader.load_descriptors(environment=environment)
    registry = build_registry(descriptors)

    click.echo(f"\n{'='*60}")
    click.echo("Secret Backends")
    click.echo(f"{'='*60}\n")

    for descriptor in descriptors:
        state = "enabled" if descriptor.enabled else "disabled"
        metadata = registry.create_metadata(descriptor)
        click.echo(
            f"  • {descriptor.name} ({type(descriptor).__name__}, {state}) -> "
            f"{metadata.path} [{metadata.lease_mode}]"
        )

    if not descriptors:
        click.echo("  (none)")


@cli.command()
@click.option("--config-dir", "-c", default="config", help="Directory holding bridge.yaml")
@click.option("--environment", "-e", default=None, help="Environment (dev/prod)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "properties"]),
    default="json",
    help="Output format",
)
@click.option("--overlay-only", is_flag=True, help="Print only the secret overlay")
def render(config_dir: str, environment: str, output_format: str, overlay_only: bool):
    """Resolve secret backends and print the effective properties."""
    from vaultbridge.config.exceptions import ConfigError
    from vaultbridge.config.loader import ConfigLoader, build_resolver
    from vaultbridge.config.merger import apply_overlay
    from vaultbridge.secrets import (
        InvalidDescriptorError,
        LoggingEventPublisher,
        SecretBackendError,
        SecretNotFoundError,
    )

    loader = ConfigLoader(config_dir)
    try:
        resolver, descriptors, properties = build_resolver(
            loader, environment=environment, publisher=LoggingEventPublisher()
        )
        overlay = resolver.resolve_all(descriptors)
    except (
        ConfigError,
        InvalidDescriptorError,
        SecretBackendError,
        SecretNotFoundError,
    ) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    result = overlay if overlay_only else apply_overlay(properties, overlay)

    if output_format == "json":
        click.echo(json.dumps(result, indent=2, default=str))
    else:
        for key, value in result.items():
            click.echo(f"{key}={'' if value is None else value}")


@cli.command()
@click.option("--config-dir", "-c", default="config", help="Directory holding bridge.yaml")
@click.option("--environment", "-e", default=None, help="Environment (dev/prod)")
def health(config_dir: str, environment: str):
    """Check config and secret source health."""
    from vaultbridge.config.exceptions import ConfigError
    from vaultbridge.config.loader import ConfigLoader

    loader = ConfigLoader(config_dir)

    click.echo(f"\n{'='*60}")
    click.echo("Health Check")
    click.echo(f"{'='*60}\n")

    config_ok = loader.health_check()
    click.echo(f"  Config:  {'✓' if config_ok else '✗'} {loader.config_dir}")
    if not config_ok:
        raise SystemExit(1)

    try:
        source = loader.load_source(environment=environment)
    except ConfigError as e:
        click.echo(f"  Source:  ✗ {e}")
        raise SystemExit(1)
    source_ok = source.health_check()
    click.echo(f"  Source:  {'✓' if source_ok else '✗'} {type(source).__name__}")
    if not source_ok:
        raise SystemExit(1)


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
