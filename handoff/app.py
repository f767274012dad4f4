from __future__ import annotations

# Single-entrypoint runner.
#
#     python -m handoff.app run [--iterations N] [--pause-seconds S]
#
# Defaults reproduce the classic demo: 20 items, a 2 second pause after each
# put, traces on stderr.

import argparse

from .coordinator import run_handoff
from .errors import InterruptPolicy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Single-slot producer/consumer hand-off - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Run one producer and one consumer over a single-slot buffer")
    p_run.add_argument("--iterations", type=int, default=20, help="items produced and consumed")
    p_run.add_argument(
        "--pause-seconds",
        type=float,
        default=2.0,
        help="producer pause after each put (outside the lock)",
    )
    p_run.add_argument("--buffer-name", default="sb", help="name used in trace lines")
    p_run.add_argument(
        "--on-interrupt",
        choices=[p.value for p in InterruptPolicy],
        default=InterruptPolicy.CONTINUE.value,
        help="what an interrupted wait does: keep waiting or abort",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.iterations < 0:
        parser.error("--iterations must be >= 0")
    if args.pause_seconds < 0:
        parser.error("--pause-seconds must be >= 0")
    if not args.buffer_name:
        parser.error("--buffer-name must not be empty")

    if args.cmd == "run":
        run_handoff(
            iterations=args.iterations,
            pause_seconds=args.pause_seconds,
            buffer_name=args.buffer_name,
            on_interrupt=InterruptPolicy(args.on_interrupt),
        )
        return


if __name__ == "__main__":
    main()
