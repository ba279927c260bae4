"""Per-file stages composed into the build graphs."""

from .banner import BannerStage, render_banner
from .base import Stage, StreamUnsupportedError
from .compile import StyleCompileStage
from .minify import MinifyStage
from .rename import RenameStage
from .text import (
    TextReplaceStage,
    banner_comment_pattern,
    rewrite_class_prefix,
    rewrite_custom_property_prefix,
    strip_banner,
)

__all__ = [
    "BannerStage",
    "MinifyStage",
    "RenameStage",
    "Stage",
    "StreamUnsupportedError",
    "StyleCompileStage",
    "TextReplaceStage",
    "banner_comment_pattern",
    "render_banner",
    "rewrite_class_prefix",
    "rewrite_custom_property_prefix",
    "strip_banner",
]
