"""Main CLI entry point for Relnote."""

import logging
import sys

import click

from .. import __version__
from ..config import ConfigError, create_sample_config, get_settings, load_release_config
from .release import render, check_config


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config-file', '-c', help='Path to the release config file (YAML or JSON)')
@click.version_option(version=__version__, prog_name="relnote")
@click.pass_context
def cli(ctx, debug, config_file):
    """Relnote - categorized release notes from commit history."""

    # Setup logging
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Store global options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['settings'] = get_settings(config_file)
    ctx.obj['logger'] = logging.getLogger('relnote')


def load_config_or_exit(ctx):
    """Load the release config named by the settings, exiting on failure."""
    settings = ctx.obj['settings']
    logger = ctx.obj['logger']

    if not settings.config_file:
        click.echo("Error: No release config found. Set RELNOTE_CONFIG_FILE, use --config-file, "
                   "or create release.yaml", err=True)
        sys.exit(1)

    logger.debug(f"Loading release config from {settings.config_file}")
    try:
        return load_release_config(settings.config_file)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--path', '-p', default='release.yaml', help='Path for the config file')
def init_config(path):
    """Create a sample release config file."""
    try:
        create_sample_config(path)
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)

    click.echo(f"Sample configuration file created at: {path}")
    click.echo("Please edit the tag and categories to match your project.")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"Relnote version {__version__}")


# Add subcommands
cli.add_command(render)
cli.add_command(check_config)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
