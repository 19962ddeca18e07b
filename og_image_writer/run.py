import sys
from pathlib import Path

import fire
from loguru import logger

from og_image_writer.config import load_config
from og_image_writer.font import Font, FontContext
from og_image_writer.style import Style
from og_image_writer.writer import OGImageWriter


def configure_logging(level):
    """Replaces loguru's default sink with one at `level`."""
    logger.remove()
    logger.add(sys.stderr, level=level)


def build_font_context(settings, fallback_fonts=()):
    """Builds the fallback table from the settings and extra font files.

    Fonts given on the command line are tried before the configured ones.
    """
    font_context = FontContext()
    for path in fallback_fonts:
        font_context.add(Font.from_path(path))
    configured = FontContext.from_settings(settings)
    for handle in range(len(configured)):
        font_context.add(configured.fetch(handle))
    return font_context


def run(
    text,
    font,
    dest="og_image.png",
    width=None,
    height=None,
    font_size=None,
    config=None,
    fallback_fonts=(),
    verbose=False,
):
    """Renders `text` into a PNG image.

    Args:
        text (str): The text to write.
        font (str): Path to the main font file.
        dest (str, optional): Where to write the PNG. Defaults to
            "og_image.png".
        width (int, optional): The image width. Overrides the configuration.
        height (int, optional): The image height. Overrides the configuration.
        font_size (float, optional): The font size. Overrides the
            configuration.
        config (str, optional): Path to a YAML configuration file.
        fallback_fonts (list[str], optional): Extra fallback font files, tried
            before the configured ones.
        verbose (bool, optional): If True, enables debug logging.

    Returns:
        str: The path of the written image.
    """
    settings = load_config(config)
    configure_logging("DEBUG" if verbose else settings.log_level)

    if isinstance(fallback_fonts, (str, Path)):
        fallback_fonts = [fallback_fonts]

    window_update = {k: v for k, v in {"width": width, "height": height}.items() if v is not None}
    window = settings.window.model_copy(update=window_update)

    style = Style()
    size = font_size or settings.default_font_size
    if size:
        style = Style(font_size=size)

    font_context = build_font_context(settings, fallback_fonts)
    writer = OGImageWriter(window, font_context)
    writer.set_text(str(text), style, Path(font).read_bytes())
    writer.generate(dest)
    return str(dest)


if __name__ == "__main__":
    fire.Fire(run)
