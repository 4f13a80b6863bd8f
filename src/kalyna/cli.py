"""Command-line interface for the DSTU 7624 (Kalyna) engine."""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

import click

from . import __version__
from .avalanche import measure_avalanche
from .engine import Dstu7624Engine
from .errors import KalynaError
from .geometry import Geometry, list_geometries
from .key_schedule import expand_key
from .trace import TraceRecorder, print_header, print_result
from .utils import bytes_to_hex, hex_to_bytes, format_state_line, words_to_hex
from .vectors import run_known_answer_tests


def _parse_hex(value: str, what: str) -> bytes:
    try:
        return hex_to_bytes(value)
    except ValueError as e:
        raise click.BadParameter(f"Invalid {what} hex: {e}") from e


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _process(
    for_encryption: bool,
    block_bits: int | None,
    key_hex: str,
    data_hex: str,
    verbose: bool,
    trace_file: TextIO | None,
) -> None:
    key = _parse_hex(key_hex, "key")
    data = _parse_hex(data_hex, "block")
    if block_bits is None:
        block_bits = len(data) * 8

    tracer = None
    if verbose or trace_file is not None:
        tracer = TraceRecorder(verbose=verbose, trace_file=trace_file)

    try:
        engine = Dstu7624Engine(block_bits, tracer=tracer)
        engine.init(for_encryption, key)
        if len(data) != engine.block_size():
            _fail(
                f"Block must be {engine.block_size() * 2} hex chars "
                f"({engine.block_size()} bytes), got {len(data_hex)} chars"
            )
        out = bytearray(engine.block_size())
        if verbose:
            print_header(f"{engine.geometry.name} {'encryption' if for_encryption else 'decryption'}")
        engine.process_block(data, 0, out, 0)
    except KalynaError as e:
        _fail(str(e))

    label = "Ciphertext" if for_encryption else "Plaintext"
    if verbose:
        print_result(label, bytes_to_hex(out))
    else:
        click.echo(bytes_to_hex(out))


@click.group()
@click.version_option(version=__version__, prog_name="kalyna")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """DSTU 7624 (Kalyna) block cipher.

    Encrypt or decrypt single blocks, inspect the key schedule and run
    the published known-answer tests.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command(name="list")
def list_cmd() -> None:
    """List supported block/key geometries."""
    click.echo("Supported geometries:")
    click.echo("")
    for geometry in list_geometries():
        click.echo(
            f"  {geometry.name:16s} block={geometry.block_bits:<4d} "
            f"key={geometry.key_bits:<4d} rounds={geometry.rounds}"
        )


@main.command()
@click.option("--block-bits", type=int, default=None,
              help="Block size in bits (default: inferred from --pt)")
@click.option("--key", "key_hex", type=str, required=True, help="Key as hex")
@click.option("--pt", "pt_hex", type=str, required=True, help="Plaintext block as hex")
@click.option("--verbose", "-v", is_flag=True, help="Print the state after every stage")
@click.option("--trace", "trace_file", type=click.File("w"), default=None,
              help="Write a JSON Lines stage trace to FILE")
def encrypt(
    block_bits: int | None,
    key_hex: str,
    pt_hex: str,
    verbose: bool,
    trace_file: TextIO | None,
) -> None:
    """Encrypt one block."""
    _process(True, block_bits, key_hex, pt_hex, verbose, trace_file)


@main.command()
@click.option("--block-bits", type=int, default=None,
              help="Block size in bits (default: inferred from --ct)")
@click.option("--key", "key_hex", type=str, required=True, help="Key as hex")
@click.option("--ct", "ct_hex", type=str, required=True, help="Ciphertext block as hex")
@click.option("--verbose", "-v", is_flag=True, help="Print the state after every stage")
@click.option("--trace", "trace_file", type=click.File("w"), default=None,
              help="Write a JSON Lines stage trace to FILE")
def decrypt(
    block_bits: int | None,
    key_hex: str,
    ct_hex: str,
    verbose: bool,
    trace_file: TextIO | None,
) -> None:
    """Decrypt one block."""
    _process(False, block_bits, key_hex, ct_hex, verbose, trace_file)


@main.command()
@click.option("--verbose", "-v", is_flag=True, help="Show every vector")
def selftest(verbose: bool) -> None:
    """Run the published DSTU 7624 known-answer vectors."""
    click.echo("Running DSTU 7624 KAT tests...")
    results = run_known_answer_tests()
    passed = 0

    for name, direction, ok, detail in results:
        if ok:
            passed += 1
            if verbose:
                click.echo(f"  {name} {direction}: PASS")
        else:
            click.echo(f"  {name} {direction}: FAIL - {detail}")

    click.echo("")
    if passed == len(results):
        click.echo(f"SELFTEST PASSED: All {len(results)} vectors passed")
        sys.exit(0)
    else:
        click.echo(f"SELFTEST FAILED: {len(results) - passed} failures")
        sys.exit(1)


@main.command()
@click.option("--block-bits", type=int, required=True, help="Block size in bits")
@click.option("--key", "key_hex", type=str, required=True, help="Key as hex")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table")
def keyschedule(block_bits: int, key_hex: str, as_json: bool) -> None:
    """Dump the round keys for a key."""
    key = _parse_hex(key_hex, "key")
    try:
        geometry = Geometry.from_key_length(block_bits, len(key))
        round_keys = expand_key(key, geometry)
    except KalynaError as e:
        _fail(str(e))

    if as_json:
        payload = {
            "geometry": geometry.to_dict(),
            "round_keys": [words_to_hex(rk) for rk in round_keys],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"{geometry.name}: {geometry.rounds} rounds, {len(round_keys)} round keys")
    for i, rk in enumerate(round_keys):
        click.echo(f"  K{i:<3d} {format_state_line(rk)}")


@main.command()
@click.option("--block-bits", type=int, default=128, help="Block size in bits (default: 128)")
@click.option("--key-bits", type=int, default=128, help="Key size in bits (default: 128)")
@click.option("--n", "trials", type=int, default=100, help="Number of trials (default: 100)")
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON")
def avalanche(block_bits: int, key_bits: int, trials: int, seed: int | None, as_json: bool) -> None:
    """Measure ciphertext bit flips caused by one plaintext bit flip."""
    try:
        result = measure_avalanche(block_bits, key_bits, trials=trials, seed=seed)
    except (KalynaError, ValueError) as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(result.summary())


if __name__ == "__main__":
    main()
