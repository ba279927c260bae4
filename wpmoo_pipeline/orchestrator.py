"""Build graph orchestration for the styles, vendor-scope and watch tasks."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .cleanup import clean_outputs
from .compiler import LibSassCompiler, StyleCompiler
from .config import PipelineConfig
from .fileio import read_sources, write_records
from .logging import get_logger
from .pipeline import Pipeline
from .serve import LiveReloadChannel, RebuildGate
from .stages import (
    BannerStage,
    MinifyStage,
    RenameStage,
    Stage,
    StyleCompileStage,
    rewrite_class_prefix,
    rewrite_custom_property_prefix,
    strip_banner,
)

CSS_MATCH = "**/*.css"
COMPRESSED_STYLE = "compressed"


class Orchestrator:
    """Assembles the stage pipelines and exposes them as named tasks."""

    def __init__(
        self,
        config: PipelineConfig,
        *,
        compiler: StyleCompiler | None = None,
        minifier: Callable[[str], str] | None = None,
        channel: LiveReloadChannel | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config
        self.compiler = compiler or LibSassCompiler()
        self.minifier = minifier
        self.channel = channel or LiveReloadChannel()
        self.clock = clock
        self.logger = get_logger("orchestrator")
        self.tasks: Dict[str, Callable[[], object]] = {
            "styles": self.styles,
            "pico:scope": self.pico_scope,
            "licenses": self.copy_licenses,
            "clean": self.clean,
            "build": self.build,
            "watch": self.watch,
            "default": self.build,
        }

    def styles_pipeline(self) -> Pipeline:
        """Compile, strip old banners, minify, then add the banner.

        With source maps on, the compiler emits compressed output itself so
        its map stays exact, and no separate minify stage runs.
        """
        styles = self.config.styles
        vendor_name = self.config.banner.vendor_name
        stages: List[Stage] = [
            StyleCompileStage(
                self.compiler,
                style=COMPRESSED_STYLE if styles.source_maps else styles.output_style,
                load_paths=[self.config.resolve(entry) for entry in styles.load_paths],
                quiet_deps=styles.quiet_deps,
            ),
            strip_banner(vendor_name, name="strip-upstream-banner"),
            strip_banner(self.config.banner.marker, name="strip-stale-banner"),
        ]
        if not styles.source_maps:
            stages.append(MinifyStage(self.minifier))
        stages.append(BannerStage(self.config.banner, clock=self.clock))
        return Pipeline("styles", stages)

    def vendor_pipeline(self) -> Pipeline:
        vendor = self.config.vendor
        return Pipeline(
            "pico:scope",
            [
                rewrite_class_prefix(vendor.class_prefix, vendor.namespace),
                rewrite_custom_property_prefix(vendor.class_prefix, vendor.namespace),
                RenameStage(vendor.out_file),
            ],
        )

    def styles(self) -> List[Path]:
        """Compile the entry stylesheets into the minified, bannered bundle."""
        styles = self.config.styles
        self.logger.info("Starting styles")
        records = read_sources(
            styles.entries,
            self.config.root,
            allow_empty=True,
            sourcemaps=styles.source_maps,
        )
        emitted = self.styles_pipeline().run(records)
        written = write_records(
            emitted, self.config.resolve(styles.dest), source_maps=styles.source_maps
        )
        self._report("styles", written)
        self.channel.stream(CSS_MATCH)(written)
        return written

    def pico_scope(self) -> List[Path]:
        """Rewrite the vendored stylesheet into the product namespace."""
        vendor = self.config.vendor
        self.logger.info("Starting pico:scope")
        records = read_sources([vendor.scoped], self.config.root, allow_empty=True)
        emitted = self.vendor_pipeline().run(records)
        written = write_records(emitted, self.config.resolve(vendor.dest), source_maps=False)
        self._report("pico:scope", written)
        self.channel.stream(CSS_MATCH)(written)
        return written

    def copy_licenses(self) -> Optional[Path]:
        """Copy the vendor license into the distribution root when present."""
        vendor = self.config.vendor
        source = self.config.resolve(vendor.license)
        if not source.is_file():
            self.logger.debug("No vendor license at %s; skipping", source)
            return None
        try:
            records = read_sources([vendor.license], self.config.root)
            emitted = Pipeline("licenses", [RenameStage(vendor.license_out)]).run(records)
            written = write_records(
                emitted, self.config.resolve(vendor.license_dest), source_maps=False
            )
        except OSError as exc:
            self.logger.debug("License copy skipped: %s", exc)
            return None
        self._report("licenses", written)
        return written[0] if written else None

    def clean(self) -> List[Path]:
        removed = clean_outputs(self.config.final_output)
        for path in removed:
            self.logger.debug("Removed %s", path)
        return removed

    def build(self) -> List[Path]:
        """Clean, compile the bundle, then copy licenses."""
        self.clean()
        written = self.styles()
        license_path = self.copy_licenses()
        if license_path is not None:
            written.append(license_path)
        return written

    def watch(self) -> None:
        """Build once, then rebuild on change and serve with live reload."""
        self.build()
        config = self.config
        self.channel.init(config)

        styles_gate = RebuildGate("styles", self._rebuild_styles)
        vendor_gate = RebuildGate("pico:scope", self._rebuild_vendor)

        self.channel.watch(str(config.root / config.styles.src), styles_gate)
        self.channel.watch(str(config.root / config.vendor.scoped), vendor_gate)
        html_base = config.resolve(config.html.base)
        for pattern in [*config.html.src, config.html.index]:
            self.channel.watch(str(html_base / pattern), self.channel.reload)

        self.logger.info("Watching for changes (Ctrl+C to stop)")
        self.channel.serve()

    def run_task(self, name: str) -> object:
        try:
            task = self.tasks[name]
        except KeyError:
            raise ValueError(f"Unknown task: {name}") from None
        return task()

    def _rebuild_styles(self) -> None:
        self.styles()
        self.copy_licenses()

    def _rebuild_vendor(self) -> None:
        self.pico_scope()
        self.copy_licenses()

    def _report(self, task: str, written: List[Path]) -> None:
        if not written:
            self.logger.info("%s: nothing to write", task)
            return
        for path in written:
            self.logger.info("%s: wrote %s", task, _display(path, self.config.root))


def _display(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


__all__ = ["COMPRESSED_STYLE", "CSS_MATCH", "Orchestrator"]
