"""Entry point: python -m peaks / peaks."""

from __future__ import annotations

import sys

import peaks
from peaks.monitor import Monitor, configure_logging, list_samplers, parse_args


def main(argv: list[str] | None = None) -> None:
    args, sampler_cls = parse_args(argv)

    if args.list_samplers:
        print("Available samplers:")
        list_samplers()
        sys.exit(0)

    if sampler_cls is None:
        all_names = sorted(set(list(peaks.REGISTRY) + list(peaks.ALIASES)))
        print(f"Unknown sampler: {args.sampler}", file=sys.stderr)
        print(f"Available: {', '.join(all_names)}", file=sys.stderr)
        sys.exit(1)
    if not sampler_cls.is_available():
        print(f"Sampler '{sampler_cls.name}' is not available on this system.", file=sys.stderr)
        sys.exit(1)

    configure_logging(args.log_file)
    monitor = Monitor(args, sampler_cls(args))
    if args.compact:
        monitor.run_compact()
    else:
        monitor.run()


if __name__ == "__main__":
    main()
