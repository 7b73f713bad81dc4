"""
Command-line front end: ``blake2s`` and ``blake2b``.

Reads a file (or standard input) in chunks, hashes it, and writes the digest
as hex, base64 or raw bytes to standard output.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import BinaryIO, Iterable, Optional, Type

from .b2b import Blake2b
from .b2s import Blake2s
from .context import Blake2Context
from .errors import Blake2Error
from .selftest import run_selftests
from .util import encode_digest, measure_speed, word_trace

_LOGGER = logging.getLogger(__name__)

CHUNK_SIZE = 1 << 16

_VARIANTS = {"b": Blake2b, "s": Blake2s}


def _build_cli(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Compute a BLAKE2s or BLAKE2b digest (RFC 7693) of a file or standard input.",
    )
    parser.add_argument(
        "-f", "-i", "--file", "--input", dest="file", metavar="PATH",
        help="file to hash (default: standard input)",
    )
    parser.add_argument(
        "-l", "--outlen", type=int, default=0, metavar="N",
        help="digest size in bytes (default: the variant maximum)",
    )
    parser.add_argument(
        "-e", "-o", "--encoding", "--output", "--coding",
        choices=("hex", "base64", "raw"), default=None,
        help="output encoding (default: hex on a terminal, raw otherwise)",
    )
    parser.add_argument("--hex", dest="encoding", action="store_const", const="hex")
    parser.add_argument("--base64", dest="encoding", action="store_const", const="base64")
    parser.add_argument(
        "-n", "--newline", "--nl", action="store_true", help="terminate the output with a newline"
    )
    parser.add_argument("-k", "--key", metavar="HEX", help="hex-encoded key")
    parser.add_argument(
        "--variant", choices=sorted(_VARIANTS),
        help="b for BLAKE2b, s for BLAKE2s (default: from the program name)",
    )
    parser.add_argument("--selftest", action="store_true", help="run the RFC 7693 self-tests")
    parser.add_argument(
        "--benchmark", type=int, metavar="MB",
        help="hash MB mebibytes of generated input and report the speed",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--trace", action="store_true",
        help="log every compression in the layout of the RFC 7693 sample computations (implies -v)",
    )
    return parser


def _select_variant(choice: Optional[str], prog: str) -> Type[Blake2Context]:
    if choice is not None:
        return _VARIANTS[choice]
    return Blake2b if "2b" in prog else Blake2s


def _hash_stream(ctx: Blake2Context, stream: BinaryIO) -> bytes:
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
        ctx.update(chunk)
    return ctx.final()


def _cmd_selftest(stdout: BinaryIO) -> int:
    results = run_selftests()
    for name, ok in results.items():
        stdout.write(f"{name}: {'ok' if ok else 'FAILED'}\n".encode("ascii"))
    return 0 if all(results.values()) else 1


def _cmd_benchmark(factory: Type[Blake2Context], size_mb: int, stdout: BinaryIO) -> int:
    size = size_mb << 20
    rates = measure_speed(lambda data: factory().update(data).final(), size, runs=3)
    for rate in rates:
        stdout.write(f"{factory.name}: {rate:.2f} MiB/s\n".encode("ascii"))
    return 0


def main(
    argv: Optional[Iterable[str]] = None,
    prog: Optional[str] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    if prog is None:
        prog = os.path.basename(sys.argv[0]) or "blake2s"
    parser = _build_cli(prog)
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or args.trace else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    stdin = stdin if stdin is not None else sys.stdin.buffer
    is_tty = stdout is None and sys.stdout.isatty()
    stdout = stdout if stdout is not None else sys.stdout.buffer
    factory = _select_variant(args.variant, prog)

    if args.selftest:
        return _cmd_selftest(stdout)
    if args.benchmark is not None:
        return _cmd_benchmark(factory, args.benchmark, stdout)

    try:
        key = bytes.fromhex(args.key) if args.key else None
    except ValueError:
        parser.error(f"invalid hex key: {args.key!r}")

    try:
        trace = word_trace(factory.word_bits) if args.trace else None
        # An outlen of 0 selects the variant default.
        ctx = factory(digest_size=args.outlen or None, key=key, trace=trace)
        _LOGGER.debug("hashing %s with %r", args.file or "<stdin>", ctx)
        if args.file:
            with open(args.file, "rb") as handle:
                digest = _hash_stream(ctx, handle)
        else:
            digest = _hash_stream(ctx, stdin)
    except (Blake2Error, OSError) as exc:
        parser.exit(2, f"{parser.prog}: error: {exc}\n")

    encoding = args.encoding
    if encoding is None:
        encoding = "hex" if is_tty else "raw"
    rendered = encode_digest(digest, encoding)
    out = rendered.encode("ascii") if isinstance(rendered, str) else rendered
    if args.newline:
        out += b"\n"
    stdout.write(out)
    stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
