"""
evmbind - generate Go bindings for EVM contracts.

Reads a contract's JSON ABI and bytecode and writes `<out>/evm.go`, holding
one typed Go function per ABI method that packs its arguments, executes the
embedded bytecode and returns the unpacked results.

Examples:
  evmbind --abi Token.abi --bin Token.bin --pkg token --out ./token
  evmbind --abi Token.abi --bin Token.bin --pkg token --out ./token --cr \\
          --rpc-url http://127.0.0.1:8545
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from evmbind.config import DEFAULT_RPC_ENDPOINT, BindConfig
from evmbind.errors import EvmBindError
from evmbind.generator import generate
from evmbind.interpreter import DEFAULT_GAS

app = typer.Typer(
    name="evmbind",
    help="Generate Go bindings for EVM contracts",
    add_completion=False,
)


@app.command()
def main(
    abi: Path = typer.Option(..., "--abi", help="Path to the ABI JSON file to bind against"),
    bin: Path = typer.Option(..., "--bin", help="Path to the bytecode binary to bind against"),
    pkg: str = typer.Option(..., "--pkg", help="Name of the package to generate the bindings into"),
    out: Path = typer.Option(..., "--out", help="Path to the output dir"),
    cr: bool = typer.Option(False, "--cr", help="Remove creation code from the binary"),
    rpc_url: str = typer.Option(
        DEFAULT_RPC_ENDPOINT,
        "--rpc-url",
        help="Node used to execute the constructor with --cr",
        envvar="EVMBIND_RPC_URL",
    ),
    gas: int = typer.Option(DEFAULT_GAS, "--gas", help="Gas budget for constructor execution"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Generate `evm.go` bindings for one contract."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BindConfig(
            abi_path=abi,
            bin_path=bin,
            package_name=pkg,
            out_dir=out,
            strip_constructor=cr,
            rpc_endpoint=rpc_url,
            gas=gas,
        )
        path = generate(config)
    except (EvmBindError, ValidationError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Generated bindings: {path}")


if __name__ == "__main__":
    app()
