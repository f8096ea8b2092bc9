from __future__ import annotations

import argparse
from dataclasses import asdict, replace
import json
import logging
from pathlib import Path
import sys

from lut_baker import __version__
from lut_baker.config import OUTPUT_DTYPES, AppConfig, load_config, validate_config
from lut_baker.utils.logging_utils import configure_logging


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lut-baker")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    bake = sub.add_parser("bake", help="Bake a .cube/.spi1d LUT into a dense RGB grid")
    bake.add_argument("input", help="Input LUT path (.cube or .spi1d)")
    bake.add_argument("--config", default=None, help="Optional YAML config")
    bake.add_argument("--out", default=None, help="Output .npy path (default: <output_dir or input dir>/<stem>.npy)")
    bake.add_argument("--resolution", type=int, default=None, help="Override grid resolution (0 = source size)")
    bake.add_argument("--linear-to-log-pre", action="store_true", help="Encode input samples to LogC before lookup")
    bake.add_argument(
        "--log-to-linear-pre",
        action="store_true",
        help="Decode input samples from LogC before lookup (off by default; needed for LUTs that expect LogC input)",
    )
    bake.add_argument("--linear-to-log-post", action="store_true", help="Encode looked-up samples to LogC")
    bake.add_argument("--log-to-linear-post", action="store_true", help="Decode looked-up samples from LogC")
    bake.add_argument("--fast-logc", action="store_true", help="Use the approximate non-branching LogC curve")
    bake.add_argument("--workers", type=int, default=None, help="Worker threads for grid evaluation")
    bake.add_argument("--dtype", choices=OUTPUT_DTYPES, default=None, help="Output sample precision")
    bake.add_argument("--no-manifest", action="store_true", help="Do not write the JSON bake manifest")
    bake.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    bake.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    info = sub.add_parser("info", help="Show parsed LUT metadata")
    info.add_argument("input", help="Input LUT path (.cube or .spi1d)")
    info.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    return parser


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config) if args.config else AppConfig()

    bake = config.bake
    if args.resolution is not None:
        bake = replace(bake, override_resolution=int(args.resolution))
    bake = replace(
        bake,
        linear_to_log_pre=bake.linear_to_log_pre or bool(args.linear_to_log_pre),
        log_to_linear_pre=bake.log_to_linear_pre or bool(args.log_to_linear_pre),
        linear_to_log_post=bake.linear_to_log_post or bool(args.linear_to_log_post),
        log_to_linear_post=bake.log_to_linear_post or bool(args.log_to_linear_post),
        precise_logc=bake.precise_logc and not bool(args.fast_logc),
    )
    if args.workers is not None:
        bake = replace(bake, workers=int(args.workers))

    output = config.output
    if args.dtype is not None:
        output = replace(output, dtype=args.dtype)
    if args.no_manifest:
        output = replace(output, write_manifest=False)

    config = replace(config, bake=bake, output=output)
    validate_config(config)
    return config


def _cmd_bake(args: argparse.Namespace) -> int:
    from lut_baker.bake import bake_file
    from lut_baker.write import BakeManifest, utc_now_iso, write_bake_manifest, write_grid_buffer

    config = _resolve_config(args)
    configure_logging(config.log_level, config.log_file, verbose=bool(args.verbose))

    input_path = Path(args.input).expanduser().resolve()
    if args.out:
        out_path = Path(args.out).expanduser().resolve()
    else:
        out_dir = config.output.output_dir or input_path.parent
        out_path = out_dir / f"{input_path.stem}.npy"

    result = bake_file(input_path, config.bake)
    write_grid_buffer(out_path, result.grid, result.size, dtype=config.output.dtype)

    manifest_path: Path | None = None
    if config.output.write_manifest:
        manifest_path = out_path.with_suffix(".json")
        manifest = BakeManifest(
            source_filename=input_path.name,
            source_format=result.parsed.source_format,
            title=result.parsed.title,
            grid_size=result.size,
            sample_count=int(result.grid.shape[0]),
            dtype=config.output.dtype,
            flags=asdict(config.bake.conversion_flags()),
            precise_logc=config.bake.precise_logc,
            tables=result.parsed.describe(),
            pipeline_hash=result.pipeline_hash,
            tool_version=__version__,
            created_at_utc=utc_now_iso(),
        )
        write_bake_manifest(manifest_path, manifest)

    payload = {
        "input": str(input_path),
        "output": str(out_path),
        "manifest": str(manifest_path) if manifest_path else None,
        "grid_size": result.size,
        "pipeline_hash": result.pipeline_hash,
    }
    if args.json:
        print(json.dumps(payload, indent=2))
        return 0

    print(f"Baked {input_path.name} -> {out_path}")
    print(f"  grid: {result.size}^3 ({result.grid.shape[0]} samples, {config.output.dtype})")
    print(f"  pipeline: {result.pipeline_hash}")
    if manifest_path:
        print(f"  manifest: {manifest_path}")
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    from lut_baker.formats import ParserRegistry

    configure_logging("INFO")
    input_path = Path(args.input).expanduser().resolve()
    parsed = ParserRegistry().parse_path(input_path)
    payload = {"input": str(input_path), **parsed.describe()}

    if args.json:
        print(json.dumps(payload, indent=2))
        return 0

    print(f"LUT: {input_path.name} ({parsed.source_format})")
    if parsed.title:
        print(f"Title: {parsed.title}")
    if parsed.lut1d is not None:
        print(
            f"1D table: {parsed.lut1d.size} entries, "
            f"domain {parsed.lut1d.domain_min:g}..{parsed.lut1d.domain_max:g}"
        )
    if parsed.lut3d is not None:
        lo, hi = parsed.lut3d.bounds()
        print(
            f"3D table: {parsed.lut3d.size}^3, domain "
            f"{' '.join(f'{v:g}' for v in lo)} .. {' '.join(f'{v:g}' for v in hi)}"
        )
    if parsed.lut1d is None and parsed.lut3d is None:
        print("No tables found")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "bake":
            return _cmd_bake(args)
        if args.command == "info":
            return _cmd_info(args)

        parser.error(f"unknown command: {args.command}")
        return 2
    except Exception as exc:
        logger.exception("fatal error")
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
