import io
from pathlib import Path
from typing import Sequence

from PIL import Image
from pptx import Presentation
from pptx.util import Emu, Inches

# Slides are 7.5 inches tall; the width follows the capture's aspect (13.333 in for 16:9).
SLIDE_HEIGHT_INCHES = 7.5
DEFAULT_SLIDE_SIZE = (1920, 1080)
BLANK_LAYOUT_INDEX = 6
MAX_IMAGE_WIDTH = 1920


def slide_dimensions(slide_size: tuple[int, int]) -> tuple[Emu, Emu]:
    """Return (width, height) in EMU for a slide matching ``slide_size`` pixels."""
    width_px, height_px = slide_size
    if width_px <= 0 or height_px <= 0:
        raise ValueError("slide_size must be positive")
    height = Inches(SLIDE_HEIGHT_INCHES)
    return Emu(int(round(height * width_px / height_px))), height


def fit_screenshot(image_path: Path, max_width: int = MAX_IMAGE_WIDTH) -> io.BytesIO:
    """Return PNG bytes for ``image_path``, keeping all of its content.

    Screenshots wider than ``max_width`` (high-DPI captures) are scaled down
    with their aspect ratio preserved.
    """
    with Image.open(image_path) as img:
        if img.width > max_width:
            new_height = int(round(img.height * max_width / img.width))
            fitted = img.resize((max_width, new_height), Image.Resampling.LANCZOS)
        else:
            fitted = img.copy()

    output = io.BytesIO()
    fitted.save(output, format="PNG")
    output.seek(0)
    return output


def build_deck(
    title: str,
    images: Sequence[Path],
    output_path: Path,
    *,
    author: str = "",
    subject: str = "",
    slide_size: tuple[int, int] = DEFAULT_SLIDE_SIZE,
) -> Path:
    """Write a deck with one full-bleed picture per image, in order.

    ``slide_size`` is the capture viewport in pixels; the slide takes its
    aspect ratio so pictures fill the slide without cropping.
    """
    prs = Presentation()
    prs.slide_width, prs.slide_height = slide_dimensions(slide_size)
    prs.core_properties.title = title
    prs.core_properties.author = author
    prs.core_properties.subject = subject

    blank = prs.slide_layouts[BLANK_LAYOUT_INDEX]
    for image_path in images:
        slide = prs.slides.add_slide(blank)
        slide.shapes.add_picture(
            fit_screenshot(Path(image_path)),
            left=0,
            top=0,
            width=prs.slide_width,
            height=prs.slide_height,
        )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    prs.save(str(output_path))
    return output_path
