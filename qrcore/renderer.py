# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

Turns a finished symbol into text, SVG or raster output. Renderers only
read ``size`` and ``get(x, y)`` and never modify the symbol.

Functions:
    to_ascii: Text rendering with block characters
    to_svg: SVG document with one path segment per dark module
    to_image: Black and white Pillow image
    to_png_bytes: PNG file content
    to_png_b64: Base64 PNG for data URIs
"""

import base64
from io import BytesIO

from PIL import Image, ImageDraw

from .constants import DEFAULT_BORDER, DEFAULT_SCALE


def _check_border(border: int) -> None:
    if border < 0:
        raise ValueError(f"Border must be non-negative: {border}")


def to_ascii(qr, border: int = DEFAULT_BORDER, filled: str = '█', empty: str = ' ') -> str:
    """
    Render the symbol as lines of text, one character per module.

    The quiet zone is ``border`` blank lines above and below and ``border``
    spaces on each side of every row.

    Example:
        >>> print(to_ascii(encode_text("HELLO", ErrorCorrectionLevel.LOW), border=1))
    """
    _check_border(border)
    size = qr.size
    blank = ' ' * (size + 2 * border)
    pad = ' ' * border
    lines = [blank] * border
    for y in range(size):
        lines.append(pad + ''.join(filled if qr.get(x, y) else empty for x in range(size)) + pad)
    lines.extend([blank] * border)
    return '\n'.join(lines)


def to_svg(qr, border: int = DEFAULT_BORDER, include_header: bool = True) -> str:
    """
    Render the symbol as an SVG document in module units.

    Args:
        qr: Symbol exposing ``size`` and ``get(x, y)``
        border (int): Quiet zone size in modules
        include_header (bool): Emit the XML declaration and DOCTYPE, leave
            them out to embed the markup into HTML

    Returns:
        str: SVG markup
    """
    _check_border(border)
    size = qr.size
    dimension = size + 2 * border
    parts = []
    for y in range(size):
        for x in range(size):
            if qr.get(x, y):
                parts.append(f"M{x + border},{y + border}h1v1h-1z")

    out = []
    if include_header:
        out.append('<?xml version="1.0" encoding="UTF-8"?>')
        out.append('<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
                   '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">')
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
               f'viewBox="0 0 {dimension} {dimension}" stroke="none">')
    out.append('<rect width="100%" height="100%" fill="#FFFFFF"/>')
    out.append(f'<path d="{" ".join(parts)}" fill="#000000"/>')
    out.append('</svg>')
    return "\n".join(out)


def to_image(qr, scale: int = DEFAULT_SCALE, border: int = DEFAULT_BORDER) -> Image.Image:
    """
    Render the symbol as a black and white image.

    Args:
        qr: Symbol exposing ``size`` and ``get(x, y)``
        scale (int): Pixel size per module, positive
        border (int): Quiet zone size in modules, non-negative

    Returns:
        Image.Image: Mode '1' image of side ``(size + 2 * border) * scale``
    """
    if scale <= 0:
        raise ValueError(f"Scale must be positive: {scale}")
    _check_border(border)

    size = qr.size
    img_px = (size + 2 * border) * scale
    img = Image.new('1', (img_px, img_px), 1)
    draw = ImageDraw.Draw(img)

    for y in range(size):
        for x in range(size):
            if not qr.get(x, y):
                continue
            x0 = (x + border) * scale
            y0 = (y + border) * scale
            draw.rectangle([x0, y0, x0 + scale - 1, y0 + scale - 1], fill=0)
    return img


def to_png_bytes(qr, scale: int = DEFAULT_SCALE, border: int = DEFAULT_BORDER) -> bytes:
    buf = BytesIO()
    to_image(qr, scale=scale, border=border).save(buf, format='PNG')
    return buf.getvalue()


def to_png_b64(qr, scale: int = DEFAULT_SCALE, border: int = DEFAULT_BORDER) -> str:
    return base64.b64encode(to_png_bytes(qr, scale=scale, border=border)).decode('ascii')
