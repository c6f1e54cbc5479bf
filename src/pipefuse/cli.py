"""Command line interface for pipefuse."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Callable, Sequence

from .config import LOG_LEVELS, EngineConfig, load_config
from .functions import add, div, even, gt, lt, mul, odd, sub
from .memory import AllocationError, MemoryResource
from .pipelines import Pipeline, pipeline

LOGGER = logging.getLogger(__name__)

TRANSFORMS: dict[str, Callable[..., Any]] = {"add": add, "sub": sub, "mul": mul, "div": div}
PREDICATES: dict[str, Callable[..., Any]] = {"gt": gt, "lt": lt, "even": even, "odd": odd}
NULLARY = {"even", "odd"}

StageSpec = tuple[str, Any]


def _parse_number(text: str) -> int | float:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _build_function(text: str, registry: dict[str, Callable[..., Any]]) -> Callable[..., Any]:
    name, sep, argument = text.strip().partition("=")
    factory = registry.get(name)
    if factory is None:
        known = ", ".join(sorted(registry))
        raise argparse.ArgumentTypeError(f"unknown function {name!r} (expected one of: {known})")
    if name in NULLARY:
        if sep:
            raise argparse.ArgumentTypeError(f"{name} takes no argument")
        return factory()
    if not sep:
        raise argparse.ArgumentTypeError(f"{name} requires an argument, e.g. {name}=1")
    try:
        return factory(_parse_number(argument))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid argument for {name}: {exc}") from exc


def parse_stage(text: str) -> StageSpec:
    """Parse ``map:add=1,add=2``, ``filter:odd`` or ``take:3`` into a stage spec."""

    kind, sep, body = text.partition(":")
    if not sep or not body:
        raise argparse.ArgumentTypeError(f"malformed stage {text!r}; expected KIND:ARGS")
    if kind == "map":
        return kind, [_build_function(part, TRANSFORMS) for part in body.split(",")]
    if kind == "filter":
        return kind, _build_function(body, PREDICATES)
    if kind == "take":
        try:
            count = int(body)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"take requires an integer, got {body!r}") from exc
        if count < 0:
            raise argparse.ArgumentTypeError("take requires a non-negative integer")
        return kind, count
    raise argparse.ArgumentTypeError(f"unknown stage kind {kind!r} (expected map, filter or take)")


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compose map/filter/take pipelines over integers.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=list(LOG_LEVELS),
        help="Logging level to use (defaults to the configured level).",
    )
    parser.add_argument("--config", type=Path, help="JSON configuration file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("demo", help="Run the built-in demonstration pipeline")

    run_parser = subparsers.add_parser("run", help="Run a pipeline over the given items")
    run_parser.add_argument("items", nargs="*", type=int, help="Input integers")
    run_parser.add_argument(
        "--stage",
        dest="stages",
        action="append",
        type=parse_stage,
        default=[],
        help="Stage to append, in order: map:add=1,add=2 | filter:odd | take:3",
    )
    run_parser.add_argument("--max-elements", type=_non_negative_int, help="Cap on output slots")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format="%(levelname)s %(name)s %(message)s")


def apply_stages(base: Pipeline, stages: Sequence[StageSpec]) -> Pipeline:
    current = base
    for kind, payload in stages:
        current = getattr(current, kind)(payload)
    return current


def demo_pipeline(resource: MemoryResource | None = None) -> Pipeline[int]:
    return (
        pipeline(resource)
        .from_(list(range(1, 11)))
        .filter(odd())
        .map([add(1), add(2)])
        .take(3)
        .map(mul(10))
    )


def _print_result(result: Sequence[Any]) -> None:
    print(" ".join(str(item) for item in result))


def _collect_and_print(built: Pipeline) -> int:
    try:
        result = built.collect()
    except AllocationError as exc:
        LOGGER.error("Pipeline output does not fit: %s", exc)
        return 1
    _print_result(result)
    return 0


def run_demo(args: argparse.Namespace, config: EngineConfig) -> int:
    return _collect_and_print(demo_pipeline(config.resource()))


def run_pipeline(args: argparse.Namespace, config: EngineConfig) -> int:
    built = apply_stages(pipeline(config.resource()).from_(args.items), args.stages)
    LOGGER.info("Running %r over %d item(s)", built, len(args.items))
    return _collect_and_print(built)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides = {"max_elements": getattr(args, "max_elements", None), "log_level": args.log_level}
    try:
        config = load_config(overrides, path=args.config)
    except (OSError, ValueError) as exc:
        parser.error(f"cannot load configuration: {exc}")
    configure_logging(config.log_level)
    if args.command == "demo":
        return run_demo(args, config)
    if args.command == "run":
        return run_pipeline(args, config)
    parser.error("Unknown command")
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
