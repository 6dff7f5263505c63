import json
from pathlib import Path
import click
from .logic import compare_streams, verify_stream

def _emit(result: dict):
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

@click.group()
def main():
    pass

@main.command("stream")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stream_cmd(path: Path):
    _emit(verify_stream(path))

@main.command("equiv")
@click.argument("original", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("simplified", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def equiv_cmd(original: Path, simplified: Path):
    _emit(compare_streams(original, simplified))

if __name__ == "__main__":
    main()
