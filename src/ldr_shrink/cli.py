"""LDR Shrink - command-line front end."""
from __future__ import annotations

import warnings
from pathlib import Path

import click

from ldr_core.protocol import DEFAULT_FILL_UNROLL_THRESHOLD
from ldr_shrink.convert import shrink_file
from ldr_shrink.layout import write_layout


@click.command()
@click.argument("input_ldr", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_ldr", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--fill-threshold",
    type=click.IntRange(min=0),
    default=DEFAULT_FILL_UNROLL_THRESHOLD,
    show_default=True,
    help="Largest FILL block (bytes) that gets unrolled into adjacent data",
)
@click.option("--layout", "layout_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Also write the chunk layout as a Parquet table")
@click.option("--quiet", is_flag=True, help="Only print warnings and errors")
def main(input_ldr: Path, output_ldr: Path, fill_threshold: int, layout_path: Path | None, quiet: bool) -> None:
    """Simplify INPUT_LDR into OUTPUT_LDR so it boots faster."""
    echo = None if quiet else click.echo

    def show(message, category, filename, lineno, file=None, line=None):
        click.echo(f"WARNING: {message}")

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("always")
            warnings.showwarning = show
            session = shrink_file(input_ldr, output_ldr, fill_threshold=fill_threshold, echo=echo)

        if layout_path is not None:
            write_layout(session.layout, layout_path)
    except Exception as e:
        # Fail closed with a single-line reason; a partial output file stays on disk.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
