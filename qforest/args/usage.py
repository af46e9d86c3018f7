# qforest/args/usage.py
from __future__ import annotations

from rich.console import Console
from rich.table import Table

from qforest import __version__
from qforest.args.options import OPTIONS
from qforest.config.tree_type import TreeType


def build_help_table() -> Table:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Option", no_wrap=True)
    table.add_column("Description")

    for spec in OPTIONS:
        table.add_row(spec.spellings, spec.help)
        if spec.long == "treetype":
            for code, label in TreeType.describe():
                table.add_row("", f"  TYPE = {code}: {label}.")
    return table


def render_help(console: Console, prog: str = "qforest") -> None:
    console.print("Usage:")
    console.print(f"    {prog} [options]", markup=False)
    console.print()
    console.print("Options:")
    console.print(build_help_table())
    console.print()
    console.print("Required: --file, and --depvarname unless --predict is given.")


def render_version(console: Console) -> None:
    console.print(f"qforest version: {__version__}", markup=False)
