"""tinyconf CLI - inspect editor configuration from a site file."""

import json
import sys
from typing import Optional

import click

from . import __version__


# --- Site Utilities ---


def load_site_config(site_path: Optional[str] = None):
    """Load the site file, or exit with an error."""
    from .site import SiteConfig, SiteConfigError, find_site_path

    path = find_site_path(site_path)
    if not path.exists():
        click.echo(f"Error: site file not found: {path}", err=True)
        sys.exit(1)
    try:
        return SiteConfig.load(path)
    except SiteConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _mask_secrets(data: dict) -> dict:
    """Mask sensitive values in site dict."""
    secret_keys = {"apikey", "api_key", "secret", "password", "token"}
    result = {}
    for k, v in data.items():
        if isinstance(v, dict):
            result[k] = _mask_secrets(v)
        elif isinstance(v, list):
            result[k] = [_mask_secrets(i) if isinstance(i, dict) else i for i in v]
        elif k in secret_keys and isinstance(v, str) and len(v) > 4:
            result[k] = f"***{v[-4:]}"
        else:
            result[k] = v
    return result


# --- CLI Groups ---


@click.group()
@click.version_option(version=__version__, prog_name="tinyconf")
def cli():
    """tinyconf - editor plugin configuration per user and context."""
    pass


# --- Core Commands ---


@cli.command()
@click.argument("context_type")
@click.argument("context_id", type=int)
@click.option("--user", "-u", "user_id", type=int, required=True, help="User id")
@click.option("--site", "-s", "site_path", type=click.Path(), help="Site file path")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging")
@click.option("--compact", is_flag=True, help="Print JSON on one line")
def configuration(
    context_type: str,
    context_id: int,
    user_id: int,
    site_path: Optional[str],
    debug: bool,
    compact: bool,
):
    """Print the editor configuration for USER in CONTEXT_TYPE CONTEXT_ID."""
    from .external import execute
    from .interfaces import ExternalError
    from .log import get_logger
    from .site import SiteConfigError, build_site

    if debug:
        get_logger().set_level("debug")

    site_config = load_site_config(site_path)
    try:
        site = build_site(site_config)
        user = site_config.get_user(user_id)
        result = execute(site, context_type, context_id, user)
    except ExternalError as e:
        click.echo(json.dumps(e.to_dict()), err=True)
        sys.exit(1)
    except SiteConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=None if compact else 2, ensure_ascii=False))


@cli.command()
@click.option("--site", "-s", "site_path", type=click.Path(), help="Site file path")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def plugins(site_path: Optional[str], as_json: bool):
    """List editor plugins in configuration order."""
    from .plugins import get_registry
    from .site import SiteConfigError, build_site

    try:
        site = build_site(load_site_config(site_path))
    except SiteConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    entries = get_registry().list_plugins(site)

    if as_json:
        click.echo(json.dumps(entries, indent=2))
        return

    click.echo("Editor plugins")
    click.echo("──────────────")
    for entry in entries:
        state = "enabled" if entry["enabled"] else "disabled"
        caps = ", ".join(entry["capabilities"]) or "-"
        click.echo(f"{entry['id']:<22} {state:<9} {caps}")


# --- Site Commands ---


@cli.group()
def site():
    """Site file commands."""
    pass


@site.command("show")
@click.option("--site", "-s", "site_path", type=click.Path(), help="Site file path")
@click.option("--reveal", is_flag=True, help="Show secrets unmasked")
def site_show(site_path: Optional[str], reveal: bool):
    """Show the site file.

    Secrets are masked by default (use --reveal to show).
    """
    import yaml

    site_config = load_site_config(site_path)
    data = dict(site_config._raw)

    if not reveal:
        data = _mask_secrets(data)

    if data:
        click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        click.echo("# Empty site file")


def main():
    cli()


if __name__ == "__main__":
    main()
