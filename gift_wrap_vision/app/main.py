"""Console entry point for estimating gift dimensions and wrapping paper."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from ..domain.results import WrapResult
from ..infrastructure.image_loader import load_image
from ..shared.errors import ApplicationError, InfrastructureError, InvalidInput
from .container import ApplicationContainer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gift-wrap-vision",
        description="Estimate gift dimensions from a photo and compute the wrapping paper it needs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    estimate = subparsers.add_parser("estimate", help="Measure the gift in a photo.")
    estimate.add_argument("image", help="Path to the photo of the gift.")
    estimate.add_argument("--json", action="store_true", help="Print the result as JSON.")

    calculate = subparsers.add_parser("calculate", help="Compute paper size for known dimensions.")
    calculate.add_argument("--length", required=True, help="Gift length in inches.")
    calculate.add_argument("--width", required=True, help="Gift width in inches.")
    calculate.add_argument("--height", required=True, help="Gift height in inches.")
    calculate.add_argument(
        "--confidence",
        default="100",
        help="Confidence percentage of the dimensions (0-100).",
    )
    calculate.add_argument("--json", action="store_true", help="Print the result as JSON.")
    return parser


def format_result(result: WrapResult) -> str:
    dims = result.dimensions
    paper = result.paper_size
    lines = [
        f'Dimensions: {dims.length:g}" x {dims.width:g}" x {dims.height:g}"',
    ]
    if result.detected_label:
        lines.append(f"Detected: {result.detected_label} ({result.shape_class.value})")
    if result.fallback_reason:
        lines.append(f"Using default dimensions: {result.fallback_reason}")
    lines.append(f"Confidence: {result.confidence_percent:.0f}% ({result.confidence_tier.value})")
    if result.advisory:
        lines.append(f"Note: {result.advisory}")
    lines.append(f'Required paper size: {paper.paper_length}" x {paper.paper_width}" (Area: {paper.surface_area} sq in)')
    lines.append("Folding instructions:")
    for index, step in enumerate(result.folding_steps, start=1):
        lines.append(f"  {index}. {step}")
    return "\n".join(lines)


async def _estimate(container: ApplicationContainer, image_path: str) -> WrapResult | None:
    logger = container.logger()
    image = load_image(image_path)
    provider = container.detection_provider()
    try:
        await provider.load()
    except InfrastructureError as exc:
        logger.warning("detector.unavailable", error=str(exc))
    return await container.session().upload(image)


def _emit(result: WrapResult, as_json: bool) -> None:
    if as_json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_result(result))


def main(argv: Sequence[str] | None = None, container: ApplicationContainer | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    container = container or ApplicationContainer()
    container.init_resources()
    logger = container.logger()
    settings = container.settings()
    logger.info("app.started", command=args.command, model_path=settings.model_path)

    try:
        if args.command == "estimate":
            result = asyncio.run(_estimate(container, args.image))
        else:
            result = container.plan_wrapping().execute(
                args.length,
                args.width,
                args.height,
                args.confidence,
            )
    except InvalidInput as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ApplicationError as exc:
        logger.error("app.failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        container.shutdown_resources()

    if result is None:
        return 1
    _emit(result, args.json)
    logger.info("app.finished", tier=result.confidence_tier.value)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
