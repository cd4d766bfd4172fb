"""ledgerbalances CLI entry point."""

from __future__ import annotations

from pathlib import Path

import click

from ledgerbalances.__version__ import __version__
from ledgerbalances.cli.report import lookup, table, tree


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="ledgerbalances")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to the ledgerbalances config file.",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None) -> None:
    """ledgerbalances CLI entry point."""
    ctx.obj = {
        "config_path": config_path,
    }


main.add_command(table)
main.add_command(tree)
main.add_command(lookup)


if __name__ == "__main__":
    main()
