"""
atlasgen CLI - Command-line interface for building texture atlases
"""

import logging
import sys

import click
from pydantic import ValidationError

from atlasgen import __version__
from atlasgen.client import generate_atlases
from atlasgen.exceptions import ConfigurationError
from atlasgen.schema import AtlasConfig

USAGE = """Texture Atlas Generator
\tUsage: atlasgen <name> <width> <height> <directory>
\tExample: atlasgen atlas 2048 2048 images"""


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def _format_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}"
        for e in error.errors()
    )


@click.command()
@click.argument('args', nargs=-1, metavar='NAME WIDTH HEIGHT DIRECTORY')
@click.option('--ext', 'extensions', multiple=True, help='Image file extension to include (repeatable, default: common formats)')
@click.option('--verbose', '-v', is_flag=True, help='Log each placement and show per-atlas statistics')
@click.version_option(version=__version__)
def cli(args, extensions, verbose):
    """
    Texture Atlas Generator - pack a directory of images into atlases.

    Every image under DIRECTORY (searched recursively) is placed on one or
    more WIDTH x HEIGHT atlases, written as NAME1.png/NAME1.txt,
    NAME2.png/NAME2.txt, ...

    Examples:
        atlasgen atlas 2048 2048 images
        atlasgen out/ui 1024 512 assets/ui --ext png -v
    """
    if len(args) != 4:
        click.echo(USAGE)
        return

    name, width, height, directory = args
    _setup_logging(verbose)

    try:
        options = {'extensions': extensions} if extensions else {}
        config = AtlasConfig(name=name, width=width, height=height, directory=directory, **options)

        click.echo(f"Building {config.width}x{config.height} atlases from: {config.directory}")
        result, report = generate_atlases(config)

    except ValidationError as e:
        click.secho(f"Error: invalid arguments: {_format_validation_error(e)}", fg='red', err=True)
        sys.exit(1)
    except ConfigurationError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg='red', err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    click.echo(f"Found {result.image_count + len(result.skipped)} images")
    for skipped in result.skipped:
        click.secho(f"Could not open file: '{skipped.path}' ({skipped.reason})", fg='yellow', err=True)

    failed = {f.index: f for f in report.failures}
    for index in range(1, len(result.atlases) + 1):
        base = config.output_base(index)
        if index in failed:
            click.secho(f"Failed to write atlas: {base} ({failed[index].reason})", fg='red', err=True)
        else:
            click.echo(f"Writing atlas: {base}")

    if verbose:
        stats = result.get_stats()
        click.echo("\nAtlas Statistics:")
        click.echo(f"  Images placed: {stats['image_count']} (skipped: {stats['skipped_count']})")
        for atlas in stats['atlases']:
            click.echo(f"  {config.output_base(atlas['index'])}: {atlas['images']} images, {atlas['occupancy']:.1%} used")

    if not report.ok:
        sys.exit(1)

    click.secho(f"✓ Success! Wrote {len(result.atlases)} atlas(es) to {config.name}1..{len(result.atlases)}", fg='green')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
