"""Command-line interface for uiuadoc."""

import click
import logging
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..core import DocgenConfig, DocgenError, OutputFormat
from ..core.generator import DocumentationGenerator
from ..frontend import ExportedProgramFrontend
from ..utils.output import OutputFormatter


def setup_logging(verbose: bool, quiet: bool) -> None:
    """Setup logging configuration."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def load_generator(export: Path, config: DocgenConfig) -> DocumentationGenerator:
    frontend = ExportedProgramFrontend.load(export)
    return DocumentationGenerator(frontend, config)


def emit(config: DocgenConfig, output_text: str) -> None:
    """Write formatted output to the configured file or stdout."""
    if config.output.output_file:
        config.output.output_file.write_text(output_text, encoding='utf-8')
        if not config.output.quiet:
            click.echo(f"Output written to {config.output.output_file}", err=True)
    else:
        click.echo(output_text)


def fail(config: DocgenConfig, error: Exception) -> None:
    click.echo(f"Error: {error}", err=True)
    if config.output.verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress output except errors')
@click.option('--config', '-c', type=click.Path(exists=True, path_type=Path),
              help='Configuration file path')
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool, config: Optional[Path]):
    """uiuadoc - documentation generator for Uiua libraries."""
    ctx.ensure_object(dict)

    # Setup logging
    setup_logging(verbose, quiet)

    # Load configuration
    try:
        if config:
            ctx.obj['config'] = DocgenConfig.load_from_file(config)
        else:
            # Try to find config file automatically
            config_file = DocgenConfig.find_config_file()
            if config_file:
                ctx.obj['config'] = DocgenConfig.load_from_file(config_file)
            else:
                ctx.obj['config'] = DocgenConfig.get_default_config()
    except DocgenError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    # Override config with CLI options
    if verbose:
        ctx.obj['config'].output.verbose = True
    if quiet:
        ctx.obj['config'].output.quiet = True


@cli.command()
@click.argument('export', type=click.Path(exists=True, path_type=Path))
@click.option('--title', '-t', help='Page title (defaults to the main file path)')
@click.option('--format', '-f', 'output_format',
              type=click.Choice(['json', 'yaml', 'text']),
              help='Output format')
@click.option('--output', '-o', type=click.Path(path_type=Path),
              help='Output file path')
@click.pass_context
def build(ctx,
          export: Path,
          title: Optional[str],
          output_format: Optional[str],
          output: Optional[Path]):
    """Build the documentation summary of a compiled library export."""
    config = ctx.obj['config']

    cli_args = {
        'title': title,
        'format': output_format,
        'output': output,
    }
    config = config.merge_with_cli_args(**{k: v for k, v in cli_args.items() if v is not None})

    try:
        generator = load_generator(export, config)
        summary = generator.generate(config.summary.title)

        formatter = OutputFormatter(config.output)
        emit(config, formatter.format_summary(summary))

    except DocgenError as e:
        fail(config, e)


@cli.command()
@click.argument('export', type=click.Path(exists=True, path_type=Path))
@click.option('--format', '-f', 'output_format',
              type=click.Choice(['json', 'yaml', 'text']),
              help='Output format')
@click.option('--output', '-o', type=click.Path(path_type=Path),
              help='Output file path')
@click.pass_context
def extract(ctx, export: Path, output_format: Optional[str], output: Optional[Path]):
    """Extract documentation items from every file of an export."""
    config = ctx.obj['config']
    cli_args = {'format': output_format, 'output': output}
    config = config.merge_with_cli_args(**{k: v for k, v in cli_args.items() if v is not None})

    try:
        generator = load_generator(export, config)
        files = generator.extract_files()

        formatter = OutputFormatter(config.output)
        emit(config, formatter.format_files(files))

    except DocgenError as e:
        fail(config, e)


@cli.command()
@click.argument('export', type=click.Path(exists=True, path_type=Path))
@click.argument('source', type=click.Path(exists=True, path_type=Path))
@click.option('--format', '-f', 'output_format',
              type=click.Choice(['json', 'text', 'html']),
              help='Output format')
@click.option('--context/--no-context', 'include_context', default=None,
              help="Classify together with the library's main file")
@click.pass_context
def highlight(ctx,
              export: Path,
              source: Path,
              output_format: Optional[str],
              include_context: Optional[bool]):
    """Tokenize a code snippet into highlighted lines."""
    config = ctx.obj['config']
    cli_args = {'format': output_format, 'include_context': include_context}
    config = config.merge_with_cli_args(**{k: v for k, v in cli_args.items() if v is not None})
    if config.output.format == OutputFormat.YAML:
        config.output.format = OutputFormat.JSON

    try:
        generator = load_generator(export, config)
        code = source.read_text(encoding='utf-8')
        lines = generator.highlight(code)

        formatter = OutputFormatter(config.output)
        emit(config, formatter.format_code_lines(lines))

    except DocgenError as e:
        fail(config, e)


@cli.command()
@click.argument('export', type=click.Path(exists=True, path_type=Path))
@click.pass_context
def info(ctx, export: Path):
    """Show information about a compiled library export."""
    config = ctx.obj['config']

    try:
        generator = load_generator(export, config)
        info = generator.get_generator_info()

        click.echo("uiuadoc Export Information")
        click.echo("=" * 40)

        click.echo(f"\nMain file: {info['main_file'] or '(not found)'}")
        click.echo(f"Bindings: {info['binding_count']}")

        click.echo("\nDocumented files:")
        for path in info['files']:
            marker = " *" if path == info['main_file'] else ""
            click.echo(f"  {path}: {info['item_counts'][path]} items{marker}")

        if info['excluded']:
            click.echo("\nExcluded files:")
            for path in info['excluded']:
                click.echo(f"  {path}")

    except DocgenError as e:
        fail(config, e)


@cli.command()
@click.option('--output', '-o', type=click.Path(path_type=Path),
              default=Path('.uiuadoc.yaml'),
              help='Output configuration file path')
@click.pass_context
def init(ctx, output: Path):
    """Initialize a new configuration file."""
    if output.exists():
        if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
            click.echo("Cancelled.")
            return

    try:
        config = DocgenConfig.get_default_config()
        config.save_to_file(output)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Configuration file created: {output}")
    click.echo("Edit this file to customize your documentation settings.")


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
