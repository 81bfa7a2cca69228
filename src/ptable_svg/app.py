from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from ptable_svg.errors import PeriodicTableError
from ptable_svg.render.export import render_png, to_data_url, write_svg
from ptable_svg.render.renderer import PeriodicTableRenderer
from ptable_svg.settings import DEFAULT_LAYOUT, DEFAULT_THEME, RenderSettings
from ptable_svg.theming.palette import category_colors, with_category_colors

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ptable-svg",
        description="Render a periodic table of elements as SVG.",
    )
    parser.add_argument("--elements", help="Element dataset path or URL (default: bundled dataset)")
    parser.add_argument("--config", help="Configuration path or URL (default: bundled configuration)")
    parser.add_argument("--theme", default=DEFAULT_THEME, help=f"Theme name (default: {DEFAULT_THEME})")
    parser.add_argument("--layout", default=DEFAULT_LAYOUT, help=f"Layout name (default: {DEFAULT_LAYOUT})")
    parser.add_argument("-o", "--output", help="Write the SVG to this file instead of stdout")
    parser.add_argument("--png", help="Also rasterize the table to this PNG file")
    parser.add_argument("--scale", type=float, default=1.0, help="PNG scale factor (default: 1.0)")
    parser.add_argument("--palette", help="Recolor the theme's categories from a matplotlib/cmcrameri colormap")
    parser.add_argument("--data-url", action="store_true", help="Print a base64 data URL instead of raw SVG")
    parser.add_argument("--preview", action="store_true", help="Show the result in a preview window")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def render(settings: RenderSettings, palette: str | None = None) -> str:
    loader = settings.make_loader()
    elements = loader.load_elements()
    config = loader.load_config()
    if palette:
        colors = category_colors(loader.get_categories(), palette)
        config = with_category_colors(config, settings.theme, colors)
    return PeriodicTableRenderer().generate(elements, config, settings.theme, settings.layout)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    settings = RenderSettings(
        theme=args.theme,
        layout=args.layout,
        elements_source=args.elements,
        config_source=args.config,
    )
    try:
        svg = render(settings, args.palette)
        if args.output:
            write_svg(svg, args.output)
        if args.data_url:
            sys.stdout.write(to_data_url(svg) + "\n")
        elif not args.output:
            sys.stdout.write(svg + "\n")
        if args.png:
            render_png(svg, args.png, args.scale)
    except PeriodicTableError as exc:
        LOGGER.debug("Rendering failed", exc_info=True)
        sys.stderr.write(f"ptable-svg: error: {exc}\n")
        return 1

    if args.preview:
        from ptable_svg.render.preview import show_preview

        return show_preview(svg, f"Periodic Table ({settings.theme}, {settings.layout})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
