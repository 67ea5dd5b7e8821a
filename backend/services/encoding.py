import io
import logging
import os
from typing import Iterable, Iterator

import numpy as np
from matplotlib.figure import Figure
from PIL import Image

logger = logging.getLogger(__name__)


def figure_to_jpeg(fig: Figure, facecolor: str = "#F0F0F0") -> bytes:
    """Render ``fig`` to JPEG bytes.

    Uses the Agg buffer + Pillow by default; ``RENDERER=savefig`` switches to
    ``Figure.savefig``.
    """
    jpeg_quality = int(os.getenv("JPEG_QUALITY", "75"))
    renderer = os.getenv("RENDERER", "agg").lower()
    out = io.BytesIO()
    if renderer == "savefig":
        fig.savefig(
            out,
            format="jpg",
            facecolor=facecolor,
            dpi=fig.dpi,
            pil_kwargs={"quality": jpeg_quality},
        )
        return out.getvalue()

    canvas = fig.canvas
    canvas.draw()
    buf = np.asarray(canvas.buffer_rgba())
    img = Image.fromarray(np.ascontiguousarray(buf[:, :, :3]))
    img.save(out, format="JPEG", quality=jpeg_quality, subsampling=2, optimize=False)
    return out.getvalue()


def _iter_gif_frames(frames: Iterable[bytes]) -> Iterator[Image.Image]:
    """Decode JPEG frames lazily and quantize them to the GIF palette."""
    for index, jpg in enumerate(frames):
        with Image.open(io.BytesIO(jpg)) as img:
            yield img.convert("RGB").quantize(colors=128)
        if index % 200 == 0:
            logger.info("gif: encoded frame %s", index)


def encode_gif(frames: list[bytes], out_path: str, fps: int) -> int:
    """Write JPEG ``frames`` as a looping GIF at ``fps``.

    Returns:
        The number of frames written.

    Raises:
        ValueError: If there are no frames.
    """
    if not frames:
        raise ValueError("no frames to encode")
    images = _iter_gif_frames(frames)
    first = next(images)
    first.save(
        out_path,
        format="GIF",
        save_all=True,
        append_images=images,
        duration=max(1, round(1000 / fps)),
        loop=0,
        optimize=False,
    )
    logger.info(
        "gif: wrote %d frames at %d fps -> %s (%.2f MiB)",
        len(frames),
        fps,
        out_path,
        os.path.getsize(out_path) / (1024 * 1024),
    )
    return len(frames)
