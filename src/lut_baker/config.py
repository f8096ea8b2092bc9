from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lut_baker.color.pipeline import ConversionFlags


OUTPUT_DTYPES = ("float32", "float16")


@dataclass
class BakeConfig:
    """Grid baking settings.

    Every LogC conversion is off by default. LUTs authored for LogC input
    usually need ``log_to_linear_pre=True``, which older importers enabled
    implicitly.
    """

    override_resolution: int = 0
    linear_to_log_pre: bool = False
    log_to_linear_pre: bool = False
    linear_to_log_post: bool = False
    log_to_linear_post: bool = False
    precise_logc: bool = True
    fallback_resolution: int = 33
    workers: int = 1
    chunk_size: int = 65536

    def conversion_flags(self) -> ConversionFlags:
        return ConversionFlags(
            linear_to_log_pre=self.linear_to_log_pre,
            log_to_linear_pre=self.log_to_linear_pre,
            linear_to_log_post=self.linear_to_log_post,
            log_to_linear_post=self.log_to_linear_post,
        )


@dataclass
class OutputConfig:
    output_dir: Path | None = None
    dtype: str = "float32"
    write_manifest: bool = True


@dataclass
class AppConfig:
    bake: BakeConfig = field(default_factory=BakeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "INFO"
    log_file: Path | None = None


def _expand_path(value: str | None, base: Path) -> Path | None:
    if value in (None, ""):
        return None
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _non_negative_int(data: dict[str, Any], key: str, default: int) -> int:
    value = int(data.get(key, default))
    if value < 0:
        raise ValueError(f"{key} must be >= 0, got {value}")
    return value


def validate_config(config: AppConfig) -> None:
    if config.bake.override_resolution < 0:
        raise ValueError("bake.override_resolution must be >= 0")
    if config.bake.fallback_resolution <= 0:
        raise ValueError("bake.fallback_resolution must be > 0")
    if config.bake.workers <= 0:
        raise ValueError("bake.workers must be > 0")
    if config.bake.chunk_size <= 0:
        raise ValueError("bake.chunk_size must be > 0")
    if config.output.dtype not in OUTPUT_DTYPES:
        raise ValueError(f"output.dtype must be one of {OUTPUT_DTYPES}, got {config.output.dtype!r}")


def load_config(path: str | Path) -> AppConfig:
    try:
        import yaml  # type: ignore
    except Exception as exc:
        raise RuntimeError("PyYAML is required for config loading. Install with: pip install PyYAML") from exc

    cfg_path = Path(path).expanduser().resolve()
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    base = cfg_path.parent
    bake_raw = raw.get("bake", {}) or {}
    output_raw = raw.get("output", {}) or {}

    bake = BakeConfig(
        override_resolution=_non_negative_int(bake_raw, "override_resolution", 0),
        linear_to_log_pre=bool(bake_raw.get("linear_to_log_pre", False)),
        log_to_linear_pre=bool(bake_raw.get("log_to_linear_pre", False)),
        linear_to_log_post=bool(bake_raw.get("linear_to_log_post", False)),
        log_to_linear_post=bool(bake_raw.get("log_to_linear_post", False)),
        precise_logc=bool(bake_raw.get("precise_logc", True)),
        fallback_resolution=int(bake_raw.get("fallback_resolution", 33)),
        workers=int(bake_raw.get("workers", 1)),
        chunk_size=int(bake_raw.get("chunk_size", 65536)),
    )

    output = OutputConfig(
        output_dir=_expand_path(output_raw.get("output_dir"), base),
        dtype=str(output_raw.get("dtype", "float32")),
        write_manifest=bool(output_raw.get("write_manifest", True)),
    )

    app = AppConfig(
        bake=bake,
        output=output,
        log_level=str(raw.get("log_level", "INFO")),
        log_file=_expand_path(raw.get("log_file"), base),
    )

    validate_config(app)
    return app
