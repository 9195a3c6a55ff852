"""
ethereum_ens.cli.main
=====================

`ens`: query and update ENS records from the shell.

Examples
--------
    $ ens --rpc http://127.0.0.1:8545 addr foo.eth
    $ ens owner foo.eth
    $ ens name 0x5FbDB2315678afecb367f032d93F642f64180aa3
    $ ens abi foo.eth --no-reverse
    $ ens set-resolver foo.eth 0x1234... --from 0xabcd... --wait

Configuration
-------------
- RPC URL      : `--rpc` or env `ENS_RPC_URL` (default: http://127.0.0.1:8545)
- Registry     : `--registry` or env `ENS_REGISTRY` (default: by network id)
- HTTP Timeout : `--timeout` or env `ENS_TIMEOUT` seconds (default: 10.0)
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable, Dict, Optional

import click
import typer

from ..config import EnsConfig
from ..ens import ENS
from ..errors import EnsError, NameNotFoundError
from ..version import version as client_version

app = typer.Typer(
    name="ens",
    help="Ethereum Name Service client: resolve names and manage records.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run", "make_ens"]

EXIT_NOT_FOUND = 2


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


@app.callback()
def _root(
    ctx: typer.Context,
    rpc: Optional[str] = typer.Option(None, "--rpc", help="Node HTTP JSON-RPC URL.", envvar="ENS_RPC_URL"),
    registry: Optional[str] = typer.Option(
        None, "--registry", help="ENS registry address (default: by network id).", envvar="ENS_REGISTRY"
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds.", envvar="ENS_TIMEOUT"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level."),
) -> None:
    """
    Resolve the effective configuration for this CLI process.
    """
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ctx.obj = EnsConfig.with_overrides(
        EnsConfig.from_env(),
        rpc_url=rpc,
        registry_address=registry,
        request_timeout=timeout,
    )


def make_ens(cfg: EnsConfig) -> ENS:
    return ENS.from_config(cfg)


def _run(ctx: typer.Context, fn: Callable[[ENS], Awaitable[Any]]) -> Any:
    cfg: EnsConfig = ctx.obj

    async def _go() -> Any:
        async with make_ens(cfg) as ens:
            return await fn(ens)

    try:
        return asyncio.run(_go())
    except NameNotFoundError:
        typer.echo("error: name not found", err=True)
        raise typer.Exit(code=EXIT_NOT_FOUND)
    except EnsError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)


def _tx(
    ctx: typer.Context,
    send: Callable[[ENS, Optional[Dict[str, Any]]], Awaitable[str]],
    sender: Optional[str],
    wait: bool,
) -> None:
    options = {"from": sender} if sender else None

    async def _go(ens: ENS) -> Dict[str, Any]:
        tx_hash = await send(ens, options)
        out: Dict[str, Any] = {"txHash": tx_hash}
        if wait:
            out["receipt"] = await ens.client.wait_for_receipt(tx_hash)  # type: ignore[attr-defined]
        return out

    _print_json(_run(ctx, _go))


_FROM = typer.Option(None, "--from", help="Sending account (default: node's first account).")
_WAIT = typer.Option(False, "--wait", help="Wait for the transaction receipt.")


# --- Read commands -------------------------------------------------------------


@app.command("version")
def version() -> None:
    """Print the client version."""
    typer.echo(f"ens {client_version()}")


@app.command("env")
def env(ctx: typer.Context) -> None:
    """Show effective RPC URL, registry and timeout."""
    _print_json(ctx.obj.to_dict())


@app.command("owner")
def owner(ctx: typer.Context, name: str = typer.Argument(..., help="ENS name, e.g. foo.eth")) -> None:
    """Print the owner of a name."""
    typer.echo(_run(ctx, lambda ens: ens.owner(name)))


@app.command("resolver")
def resolver(ctx: typer.Context, name: str = typer.Argument(..., help="ENS name")) -> None:
    """Print the resolver contract address of a name."""
    typer.echo(_run(ctx, lambda ens: ens.resolver(name).resolver_address()))


@app.command("addr")
def addr(ctx: typer.Context, name: str = typer.Argument(..., help="ENS name")) -> None:
    """Resolve a name to an address."""
    typer.echo(_run(ctx, lambda ens: ens.resolver(name).addr()))


@app.command("name")
def name(ctx: typer.Context, address: str = typer.Argument(..., help="0x-address")) -> None:
    """Reverse-resolve an address to its name."""
    typer.echo(_run(ctx, lambda ens: ens.reverse(address).name()))


@app.command("abi")
def abi(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="ENS name"),
    no_reverse: bool = typer.Option(False, "--no-reverse", help="Do not fall back to the reverse record."),
) -> None:
    """Print the contract ABI recorded for a name."""
    _print_json(_run(ctx, lambda ens: ens.resolver(name).abi(not no_reverse)))


# --- Write commands ------------------------------------------------------------


@app.command("set-owner")
def set_owner(
    ctx: typer.Context,
    name: str = typer.Argument(...),
    address: str = typer.Argument(..., help="New owner"),
    sender: Optional[str] = _FROM,
    wait: bool = _WAIT,
) -> None:
    """Transfer ownership of a name."""
    _tx(ctx, lambda ens, opts: ens.set_owner(name, address, opts), sender, wait)


@app.command("set-resolver")
def set_resolver(
    ctx: typer.Context,
    name: str = typer.Argument(...),
    address: str = typer.Argument(..., help="Resolver contract"),
    sender: Optional[str] = _FROM,
    wait: bool = _WAIT,
) -> None:
    """Set the resolver contract of a name."""
    _tx(ctx, lambda ens, opts: ens.set_resolver(name, address, opts), sender, wait)


@app.command("set-subnode-owner")
def set_subnode_owner(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Subname, e.g. baz.bar.eth"),
    address: str = typer.Argument(..., help="New owner"),
    sender: Optional[str] = _FROM,
    wait: bool = _WAIT,
) -> None:
    """Create or reassign a subname (sender must own the parent)."""
    _tx(ctx, lambda ens, opts: ens.set_subnode_owner(name, address, opts), sender, wait)


@app.command("set-addr")
def set_addr(
    ctx: typer.Context,
    name: str = typer.Argument(...),
    address: str = typer.Argument(..., help="Address record"),
    sender: Optional[str] = _FROM,
    wait: bool = _WAIT,
) -> None:
    """Set the address record of a name on its resolver."""
    _tx(ctx, lambda ens, opts: ens.resolver(name).setAddr(address, options=opts), sender, wait)


# --- Entrypoints --------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        rv = app(prog_name="ens", standalone_mode=False, args=argv)
    except typer.Exit as e:
        return int(e.exit_code)
    except click.ClickException as e:
        # usage errors: bad or missing arguments and options
        e.show()
        return e.exit_code
    except click.Abort:
        typer.echo("aborted", err=True)
        return 1
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        return 1
    return rv if isinstance(rv, int) else 0


def run(argv: Optional[list[str]] = None) -> int:
    """Alias for :func:`main`."""
    return main(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
