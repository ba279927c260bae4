"""Configuration loading for wpmoo-pipeline (.wpmoo-pipeline.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .models import SUPPORTED_STYLES

CONFIG_FILENAME = ".wpmoo-pipeline.yml"

_MARKER_PLACEHOLDER = re.compile(r"\{\{\s*marker\s*\}\}")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class StylesConfig:
    """Main bundle inputs and outputs."""

    entries: List[str] = field(default_factory=lambda: ["scss/wpmoo.scss"])
    src: str = "scss/**/*.scss"
    dest: str = "css"
    final_out: str = "wpmoo.css"
    load_paths: List[str] = field(default_factory=lambda: ["node_modules"])
    output_style: str = "expanded"
    quiet_deps: bool = True
    source_maps: bool = True


@dataclass
class HtmlConfig:
    """Pages that only trigger a full reload when they change."""

    src: List[str] = field(default_factory=lambda: ["*.html"])
    base: str = "."
    index: str = "sample.html"


@dataclass
class VendorConfig:
    """Vendored Pico stylesheet that gets rewritten into the wpmoo namespace."""

    scoped: str = "vendor/pico/css/pico.conditional.css"
    dest: str = "dist/assets"
    out_file: str = "pico-wpmoo.css"
    class_prefix: str = "pico"
    namespace: str = "wpmoo"
    license: str = "vendor/pico/LICENSE.md"
    license_dest: str = "dist"
    license_out: str = "LICENSE-PICO.md"


@dataclass
class BannerConfig:
    """Attribution banner prepended to the minified bundle."""

    marker: str = "WPMoo UI bundle"
    title: str = "Scoped Base"
    license: str = "MIT"
    vendor_name: str = "Pico CSS"
    vendor_license: str = "MIT"
    vendor_license_file: str = "LICENSE-PICO.md"
    template: Optional[str] = None


@dataclass
class ServeConfig:
    """Development server settings."""

    host: str = "localhost"
    port: int = 3000
    open: bool = True
    live_css: bool = True


@dataclass
class PipelineConfig:
    """Path table and settings every task consults instead of hardcoded paths."""

    root: Path
    styles: StylesConfig = field(default_factory=StylesConfig)
    html: HtmlConfig = field(default_factory=HtmlConfig)
    vendor: VendorConfig = field(default_factory=VendorConfig)
    banner: BannerConfig = field(default_factory=BannerConfig)
    serve: ServeConfig = field(default_factory=ServeConfig)

    def resolve(self, relative: str) -> Path:
        """Return ``relative`` anchored at the project root."""
        return (self.root / relative).resolve()

    @property
    def final_output(self) -> Path:
        return self.resolve(self.styles.dest) / self.styles.final_out


def load_config(config_path: Path) -> PipelineConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PipelineConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = PipelineConfig(root=root)

    styles_data = _as_dict(data.get("styles"))
    if styles_data:
        styles = config.styles
        styles.entries = _as_str_list(styles_data.get("entries")) or styles.entries
        styles.src = _as_str(styles_data.get("src")) or styles.src
        styles.dest = _as_str(styles_data.get("dest")) or styles.dest
        styles.final_out = _as_str(styles_data.get("final_out")) or styles.final_out
        if "load_paths" in styles_data:
            styles.load_paths = _as_str_list(styles_data.get("load_paths"))
        styles.output_style = _as_str(styles_data.get("output_style")) or styles.output_style
        if styles.output_style not in SUPPORTED_STYLES:
            raise ConfigError(
                f"styles.output_style must be one of {', '.join(SUPPORTED_STYLES)}; "
                f"got {styles.output_style!r}"
            )
        styles.quiet_deps = _bool_or(styles_data.get("quiet_deps"), styles.quiet_deps)
        styles.source_maps = _bool_or(styles_data.get("source_maps"), styles.source_maps)

    html_data = _as_dict(data.get("html"))
    if html_data:
        html = config.html
        html.src = _as_str_list(html_data.get("src")) or html.src
        html.base = _as_str(html_data.get("base")) or html.base
        html.index = _as_str(html_data.get("index")) or html.index

    vendor_data = _as_dict(data.get("vendor"))
    if vendor_data:
        vendor = config.vendor
        for key in (
            "scoped",
            "dest",
            "out_file",
            "class_prefix",
            "namespace",
            "license",
            "license_dest",
            "license_out",
        ):
            value = _as_str(vendor_data.get(key))
            if value:
                setattr(vendor, key, value)

    banner_data = _as_dict(data.get("banner"))
    if banner_data:
        banner = config.banner
        for key in (
            "marker",
            "title",
            "license",
            "vendor_name",
            "vendor_license",
            "vendor_license_file",
        ):
            value = _as_str(banner_data.get(key))
            if value:
                setattr(banner, key, value)
        banner.template = _as_str(banner_data.get("template"))
        if banner.template and not _MARKER_PLACEHOLDER.search(banner.template):
            # The stale-banner strip searches for the rendered marker.
            raise ConfigError("banner.template must contain {{ marker }}")

    serve_data = _as_dict(data.get("serve"))
    if serve_data:
        serve = config.serve
        serve.host = _as_str(serve_data.get("host")) or serve.host
        port = _as_int(serve_data.get("port"))
        if port is not None:
            serve.port = port
        serve.open = _bool_or(serve_data.get("open"), serve.open)
        serve.live_css = _bool_or(serve_data.get("live_css"), serve.live_css)

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _bool_or(value: Any, default: bool) -> bool:
    parsed = _as_bool(value)
    return default if parsed is None else parsed


def _as_str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "BannerConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "HtmlConfig",
    "PipelineConfig",
    "ServeConfig",
    "StylesConfig",
    "VendorConfig",
    "load_config",
]
