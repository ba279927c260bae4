"""Attribution banner prepended to the finished bundle."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from jinja2 import Environment, StrictUndefined

from ..config import BannerConfig
from ..models import FileRecord
from ..sourcemap import remap_edits
from .base import Stage

DEFAULT_TEMPLATE = (
    "/*!\n"
    " * {{ marker }}: {{ title }}\n"
    " * Copyright {{ year }} - Licensed under {{ license }}\n"
    " * Contains portions of {{ vendor_name }} ({{ vendor_license }}). See {{ vendor_license_file }}.\n"
    " */\n"
)

_ENV = Environment(keep_trailing_newline=True, undefined=StrictUndefined, autoescape=False)


def render_banner(config: BannerConfig, *, year: int) -> str:
    """Render the banner text for ``year``; it always ends with a newline."""
    template = _ENV.from_string(config.template or DEFAULT_TEMPLATE)
    banner = template.render(
        marker=config.marker,
        title=config.title,
        year=year,
        license=config.license,
        vendor_name=config.vendor_name,
        vendor_license=config.vendor_license,
        vendor_license_file=config.vendor_license_file,
    )
    if config.marker not in banner:
        raise ValueError(f"Banner template must render the marker {config.marker!r}")
    return banner if banner.endswith("\n") else banner + "\n"


class BannerStage(Stage):
    """Prepend the banner; runs after minification so it is not stripped."""

    name = "banner"

    def __init__(
        self,
        config: BannerConfig,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config
        self._clock = clock or datetime.now

    def apply(self, record: FileRecord) -> Optional[FileRecord]:
        if record.is_null():
            return record
        self.require_buffer(record)
        banner = render_banner(self.config, year=self._clock().year)
        code = record.text()
        record.set_text(banner + code)
        if record.source_map is not None:
            record.source_map = remap_edits(
                record.source_map, code, banner + code, [(0, 0, banner)]
            )
        return record


__all__ = ["BannerStage", "DEFAULT_TEMPLATE", "render_banner"]
