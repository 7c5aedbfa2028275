"""
depsize CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

from typing import Optional

import click

from ..config import DepsizeConfig
from ..core.exceptions import ConfigError
from .commands import chunks, files, modules, tree
from .utils import configure_logging, echo_error


@click.group()
@click.version_option(package_name="depsize")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", "config_path", default=None,
              type=click.Path(dir_okay=False),
              help="Path to config YAML (default: .depsize/config.yaml)")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Optional[str]):
    """depsize: Bundle Dependency Size Explorer.

    Shows which modules make a bundle chunk big, and how much smaller it
    gets without them.

    \b
    Quick Start:
      depsize files ./build
      depsize chunks stats.json
      depsize modules stats.json --chunk 0 --exclude 12
      depsize tree stats.json --expand-all --max-depth 3
    """
    configure_logging(verbose)
    try:
        ctx.obj = DepsizeConfig.load(config_path)
    except ConfigError as e:
        echo_error(str(e))
        ctx.exit(1)


# Register commands
main.add_command(files.files)
main.add_command(chunks.chunks)
main.add_command(modules.modules)
main.add_command(tree.tree)

if __name__ == "__main__":
    main()
