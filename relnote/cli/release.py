"""Release note commands."""

import sys

import click

from ..releasenote import (
    ReleaseProposal,
    build_release_commits,
    load_commits,
    render_release_note,
)


def read_commits_or_exit(path, logger):
    """Read the commit feed from a file, or stdin for ``-``."""
    try:
        if path == '-':
            commits = load_commits(click.get_text_stream('stdin'))
        else:
            with open(path, 'r', encoding='utf-8') as f:
                commits = load_commits(f)
    except (OSError, ValueError) as e:
        click.echo(f"Error reading commits from {path}: {e}", err=True)
        sys.exit(1)

    logger.info(f"Loaded {len(commits)} commits from {path}")
    return commits


@click.command()
@click.option('--commits', '-i', 'commits_path', help='JSON commit feed, or - for stdin')
@click.option('--pre-tag', '-p', default='', help='Previous release tag the changes are compared with')
@click.option('--tag', '-t', help='Release tag (overrides the tag in the config file)')
@click.option('--prerelease', is_flag=True, help='Mark the release as a pre-release')
@click.option('--output', '-o', help='Write the release note to a file instead of stdout')
@click.pass_context
def render(ctx, commits_path, pre_tag, tag, prerelease, output):
    """Render the release note for a tag."""

    # Import here to avoid circular dependency
    from .main import load_config_or_exit

    settings = ctx.obj['settings']
    logger = ctx.obj['logger']

    config = load_config_or_exit(ctx)
    if tag:
        config = config.model_copy(update={'tag': tag})

    commits_path = commits_path or settings.commits_file
    if not commits_path:
        click.echo("Error: No commit feed given. Use --commits or set RELNOTE_COMMITS_FILE", err=True)
        sys.exit(1)

    commits = read_commits_or_exit(commits_path, logger)

    logger.info(f"Generating release note for tag: {config.tag}")
    release_commits = build_release_commits(commits, config)
    proposal = ReleaseProposal(
        tag=config.tag,
        pre_tag=pre_tag,
        commits=release_commits,
        prerelease=prerelease,
    )
    release_note = render_release_note(proposal, config)

    if not release_commits:
        logger.warning("No commits selected (all excluded or none matched the include rule)")

    output = output or settings.output
    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(release_note)
        except OSError as e:
            click.echo(f"Error writing to file {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Release note saved to: {output}")
    else:
        click.echo(release_note, nl=False)


@click.command()
@click.pass_context
def check_config(ctx):
    """Validate the release config and show its categories."""

    # Import here to avoid circular dependency
    from .main import load_config_or_exit

    config = load_config_or_exit(ctx)

    click.echo(f"Tag: {config.tag}")
    if config.name:
        click.echo(f"Name: {config.name}")
    click.echo(f"Categories: {len(config.commit_categories)}")
    for category in config.commit_categories:
        marker = " (catch-all)" if category.is_empty() else ""
        click.echo(f"  - {category.id}: {category.display_title}{marker}")
