"""Umbra CLI entry point."""
from __future__ import annotations

import json
import logging

import click

from umbra.config import DEFAULT_STYLESHEETS, UmbraConfig

_DEFAULTS = UmbraConfig()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def common_options(fn):
    """Options shared by every command that touches files."""
    fn = click.option(
        "--log-level",
        default="info",
        type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
        help="Logging verbosity",
    )(fn)
    fn = click.option(
        "--stylesheet",
        "stylesheets",
        multiple=True,
        help="Stylesheet file name (repeatable); defaults to the built-in set",
    )(fn)
    fn = click.option(
        "--catalog", default=_DEFAULTS.catalog_path, help="Attribute catalog JSON path"
    )(fn)
    fn = click.option(
        "--colors", default=_DEFAULTS.colors_path, help="Color map JSON path"
    )(fn)
    fn = click.option(
        "--stylesheet-dir",
        default=_DEFAULTS.stylesheet_dir,
        help="Directory containing the stylesheets",
    )(fn)
    return fn


def _build_config(
    stylesheet_dir: str,
    colors: str,
    catalog: str,
    stylesheets: tuple[str, ...],
    **overrides,
) -> UmbraConfig:
    return UmbraConfig(
        stylesheet_dir=stylesheet_dir,
        colors_path=colors,
        catalog_path=catalog,
        stylesheets=stylesheets or DEFAULT_STYLESHEETS,
        **overrides,
    )


@click.group()
def cli():
    """Umbra: pick dark-mode colors and write them into stylesheets."""
    pass


@cli.command()
@click.option("--host", default=_DEFAULTS.host, help="Host to bind to")
@click.option("--port", default=_DEFAULTS.port, type=int, help="Port to bind to")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
@common_options
def serve(
    host: str,
    port: int,
    debug: bool,
    stylesheet_dir: str,
    colors: str,
    catalog: str,
    stylesheets: tuple[str, ...],
    log_level: str,
) -> None:
    """Start the Umbra web server."""
    from umbra.web.app import create_app

    _configure_logging(log_level)
    config = _build_config(stylesheet_dir, colors, catalog, stylesheets, host=host, port=port)
    app = create_app(config=config)
    click.echo(f"Starting Umbra on {host}:{port}")
    app.run(host=host, port=port, debug=debug, threaded=True)


@cli.command()
@common_options
def apply(
    stylesheet_dir: str,
    colors: str,
    catalog: str,
    stylesheets: tuple[str, ...],
    log_level: str,
) -> None:
    """Rewrite dark-mode blocks from the saved color map."""
    from umbra.errors import NotFoundError, ValidationError
    from umbra.web.app import build_service

    _configure_logging(log_level)
    config = _build_config(stylesheet_dir, colors, catalog, stylesheets)
    service = build_service(config)
    try:
        report = service.apply()
    except NotFoundError:
        raise click.ClickException(
            f"Configuration file {config.colors_path} not found. "
            "Save some colors from the editor first."
        )
    except ValidationError as exc:
        raise click.ClickException(str(exc))

    for name in report.updated_files:
        click.echo(f"Updated dark mode styles in {name}")
    for name, failure in report.failures.items():
        click.echo(f"Failed {name} ({failure.kind.value}): {failure.message}", err=True)
    if not report.ok:
        raise SystemExit(1)


@cli.command()
@common_options
@click.option("--property", "properties", multiple=True, help="Color property to collect (repeatable)")
def catalog(
    stylesheet_dir: str,
    colors: str,
    catalog: str,
    stylesheets: tuple[str, ...],
    log_level: str,
    properties: tuple[str, ...],
) -> None:
    """Extract color-carrying selector/property pairs into the catalog."""
    from umbra.errors import PersistenceError
    from umbra.store.files import CatalogStore, StylesheetStore
    from umbra.stylesheet.catalog import DEFAULT_COLOR_PROPERTIES, build_catalog

    _configure_logging(log_level)
    config = _build_config(
        stylesheet_dir,
        colors,
        catalog,
        stylesheets,
        color_properties=properties or DEFAULT_COLOR_PROPERTIES,
    )
    data = build_catalog(
        StylesheetStore(config.stylesheet_dir),
        config.stylesheets,
        config.color_properties,
    )
    store = CatalogStore(config.catalog_path)
    try:
        store.save(data)
    except PersistenceError as exc:
        raise click.ClickException(str(exc))
    count = sum(len(props) for selectors in data.values() for props in selectors.values())
    click.echo(f"Color properties extracted to {store.path} ({count} entries)")


@cli.command()
@click.option("--colors", default=_DEFAULTS.colors_path, help="Color map JSON path")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Logging verbosity",
)
def show(colors: str, log_level: str) -> None:
    """Print the saved color map."""
    from umbra.colormap import validate_color_map
    from umbra.errors import ValidationError
    from umbra.store.files import ColorMapStore

    _configure_logging(log_level)
    try:
        data = validate_color_map(ColorMapStore(colors).load_or_empty())
    except ValidationError as exc:
        raise click.ClickException(str(exc))
    click.echo(json.dumps(data, indent=2))
