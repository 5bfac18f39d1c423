#!/usr/bin/env python
"""
SnipCheck CLI Tool
Command-line interface for validating fenced code snippets
"""

import json
import shlex
import shutil
from typing import List, Optional, Tuple

import click
import yaml

from snipcheck import SnipCheck, __version__
from snipcheck.config import OUTPUT_FORMATS, Config, ToolchainSpec
from snipcheck.exceptions import MalformedDocumentError
from snipcheck.report.renderers import get_renderer
from snipcheck.utils.logger import get_logger, setup_logging
from snipcheck.verifier.toolchain import parse_override

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_MALFORMED = 2

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def _build_config(
    config_file: Optional[str],
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
    output_format: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Config:
    """Load configuration and apply command-line overrides"""
    try:
        base = Config.from_file(config_file) if config_file else Config()
        data = base.model_dump()
        if workers is not None:
            data["verifier"]["workers"] = workers
        if timeout is not None:
            data["verifier"]["timeout"] = timeout
        if output_format is not None:
            data["output"]["format"] = output_format
        if log_level is not None:
            data["log_level"] = log_level
        return Config(**data)
    except (ValueError, yaml.YAMLError) as e:
        raise click.UsageError(f"Invalid configuration: {e}")


def _parse_toolchains(values: Tuple[str, ...]) -> List[Tuple[str, ToolchainSpec]]:
    overrides = []
    for value in values:
        try:
            overrides.append(parse_override(value))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--toolchain")
    return overrides


def _read_document(ctx: click.Context, document) -> Tuple[str, str]:
    source = document.name
    try:
        return document.read(), source
    except UnicodeDecodeError as e:
        click.echo(f"❌ {source} is not valid UTF-8: {e}", err=True)
        ctx.exit(EXIT_MALFORMED)


@click.group()
@click.version_option(version=__version__, prog_name="snipcheck")
def cli():
    """
    🔍 SnipCheck - validate the code snippets of a Markdown guide

    Extracts fenced code blocks, groups them by language and runs each one
    through an external syntax checker.
    """
    pass


@cli.command()
@click.argument('document', type=click.File('r', encoding='utf-8'))
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--workers', '-w', type=click.IntRange(min=1), help='Concurrent checker invocations')
@click.option('--timeout', '-t', type=click.FloatRange(min=0, min_open=True),
              help='Global timeout in seconds')
@click.option('--toolchain', '-T', 'toolchains', multiple=True, metavar='TAG=COMMAND',
              help='Register or override a checker, e.g. c="gcc -fsyntax-only -x c -"')
@click.option('--format', '-f', 'output_format', type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
              help='Summary format')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the summary to a file')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), help='Log level')
@click.pass_context
def check(ctx: click.Context, document, config_file: Optional[str], workers: Optional[int],
          timeout: Optional[float], toolchains: Tuple[str, ...], output_format: Optional[str],
          output: Optional[str], log_level: Optional[str]):
    """Verify every fenced code block in DOCUMENT (use - for stdin)"""

    cfg = _build_config(config_file, workers, timeout, output_format, log_level)
    setup_logging(cfg.log_level, cfg.log_file)
    overrides = _parse_toolchains(toolchains)

    text, source = _read_document(ctx, document)

    try:
        summary = SnipCheck(cfg, toolchain_overrides=overrides).check(text, source)
    except MalformedDocumentError as e:
        logger.error(f"Malformed document {source}: {e}")
        click.echo(f"❌ {source}: {e}", err=True)
        ctx.exit(EXIT_MALFORMED)

    renderer = get_renderer(cfg.output.format)
    if output:
        renderer.render_to_file(summary, output)
        click.echo(f"📁 Summary saved to {output}", err=True)
    else:
        click.echo(renderer.render(summary), nl=False)

    ctx.exit(summary.exit_code)


@cli.command()
@click.argument('document', type=click.File('r', encoding='utf-8'))
@click.option('--json', 'as_json', is_flag=True, help='Print blocks as JSON Lines')
@click.pass_context
def blocks(ctx: click.Context, document, as_json: bool):
    """List the fenced code blocks of DOCUMENT without verifying them"""

    setup_logging("WARNING")
    text, source = _read_document(ctx, document)

    try:
        extracted = SnipCheck(Config()).list_blocks(text, source)
    except MalformedDocumentError as e:
        click.echo(f"❌ {source}: {e}", err=True)
        ctx.exit(EXIT_MALFORMED)

    if as_json:
        for block in extracted:
            click.echo(json.dumps({
                'index': block.index,
                'line': block.line,
                'language': block.language,
                'section': block.section_title,
                'lines': len(block.text.splitlines()),
            }, ensure_ascii=False))
        return

    click.echo(f"\n📄 {source}: {len(extracted)} code blocks\n")
    for block in extracted:
        section = block.section_title or "-"
        click.echo(f"  [{block.index:>3}] line {block.line:<5} {block.language or '(untagged)':<12} {section}")
    click.echo()


@cli.command()
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--toolchain', '-T', 'toolchains', multiple=True, metavar='TAG=COMMAND',
              help='Register or override a checker')
def toolchains(config_file: Optional[str], toolchains: Tuple[str, ...]):
    """List registered toolchains and whether their executables are available"""

    cfg = _build_config(config_file)
    registry = SnipCheck(cfg, toolchain_overrides=_parse_toolchains(toolchains)).registry

    click.echo("\n🔧 Toolchains:\n")
    for tag, command in registry.to_dict().items():
        argv = shlex.split(command)
        available = bool(argv) and shutil.which(argv[0]) is not None
        mark = "✓" if available else "✗"
        click.echo(f"  {mark} {tag:<10} {command}")

    click.echo(f"\nTotal: {len(registry)} toolchains\n")


@cli.command()
def version():
    """Show version information"""

    click.echo(f"SnipCheck v{__version__}")
    click.echo("License: MIT")


if __name__ == '__main__':
    cli()
