#!filepath: qforest/cli.py
import sys
from typing import Callable, List, Optional, Sequence

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from qforest import logs, init_logging
from qforest.args.options import InfoRequest
from qforest.args.outcome import OutcomeKind
from qforest.args.pipeline import parse_arguments
from qforest.args.scanner import OptionScanner
from qforest.args.usage import render_help, render_version
from qforest.config.app_config import AppConfig
from qforest.config.run_config import RunConfiguration

app = typer.Typer(help="Quantile / instrumental forest command line", add_completion=False)

console = Console()
err_console = Console(stderr=True)

# engine: consumes the validated configuration, returns an exit code
Engine = Callable[[RunConfiguration], int]


def echo_engine(config: RunConfiguration) -> int:
    """
    默认 engine：只回显解析后的参数（训练 / 预测 engine 在外部）
    """
    mode = "predict" if config.prediction_mode else "train"

    if config.verbose:
        table = Table(title="Run configuration", show_header=True, header_style="bold")
        table.add_column("Parameter")
        table.add_column("Value")
        for name, value in config.model_dump().items():
            table.add_row(name, escape(str(value)))
        console.print(table)
    else:
        console.print(
            f"[green]OK[/green] mode={mode} file={escape(config.input_file)} "
            f"treetype={config.tree_type.label} ntree={config.num_trees}"
        )
    return 0


@logs.catch("engine run failed", log_time=True)
def _run_engine(engine: Engine, config: RunConfiguration) -> int:
    return engine(config)


def execute(
    argv: Sequence[str],
    *,
    engine: Optional[Engine] = None,
    app_config: Optional[AppConfig] = None,
) -> int:
    """
    Process boundary: parse → (help | version | error | engine).

    Exit codes: 0 for a completed run or an informational request,
    1 for any parse / validation failure, including a bad QFOREST_* setting.
    """
    try:
        cfg = app_config or AppConfig.load()
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] invalid configuration: {escape(str(e))}")
        return 1

    # logging first, so --verbose also shows the scanner / validator debug lines
    init_logging(cfg.log, verbose=OptionScanner.requests_verbose(argv))
    outcome = parse_arguments(argv, defaults=cfg.defaults)

    if outcome.kind is OutcomeKind.STOP:
        if outcome.info is InfoRequest.HELP:
            render_help(console)
        else:
            render_version(console)
        return 0

    if outcome.kind is OutcomeKind.ERROR:
        err_console.print(f"[red]Error:[/red] {escape(str(outcome.error))}")
        return 1

    logs.info(f"[cli] proceeding with {len(outcome.leftovers)} unprocessed parameter(s)")
    return _run_engine(engine or echo_engine, outcome.config)


@app.command()
def run(argv: Optional[List[str]] = typer.Argument(None, help="Raw forest options, see --help")):
    """
    解析 forest 参数并运行（参数原样交给 OptionScanner）
    """
    raise typer.Exit(code=execute(argv or []))


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else list(argv)
    # leading "--" keeps click from interpreting any of the raw options
    app(args=["--", *args], prog_name="qforest")


if __name__ == "__main__":
    main()

# python -m qforest.cli --file data.csv --depvarname y --ntree 100
