"""
Pixelator — web front-end

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import streamlit as st
from PIL import Image, ImageDraw

from pixelator.config import PixelatorConfig
from pixelator.engine import pixelate_raster
from pixelator.errors import PixelatorError
from pixelator.image_io import load_raster, to_display

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Pixelator",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = PixelatorConfig()
_PREVIEW_HEIGHT = 480


# -- Helpers -----------------------------------------------------------

def _preview(raster: np.ndarray, height: int = _PREVIEW_HEIGHT) -> Image.Image:
    """Nearest-neighbour enlargement so blocks stay crisp on screen."""
    img = to_display(raster)
    width = max(1, round(img.width * height / img.height))
    return img.resize((width, height), Image.NEAREST)


def _add_passepartout(img: Image.Image, border: int = 20) -> Image.Image:
    w, h = img.size
    canvas = Image.new("RGB", (w + border * 2, h + border * 2), (250, 249, 246))
    canvas.paste(img, (border, border), img if img.mode == "RGBA" else None)
    draw = ImageDraw.Draw(canvas)
    draw.rectangle(
        [border - 1, border - 1, border + w, border + h],
        outline=(224, 222, 216), width=1,
    )
    return canvas


def _to_png(raster: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(raster).save(buf, format="PNG")
    return buf.getvalue()


# -- Title -------------------------------------------------------------
st.title("Pixelator")
st.caption(
    "Every square block of pixels is replaced by its average colour. "
    "Images whose sides do not divide by the block size can be cropped "
    "to fit, and the result can be stretched back to the original size."
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2 = st.columns(2)
with ctrl1:
    scale = st.slider("Block size (px)", 1, 64, _DEFAULTS.max_scale)
with ctrl2:
    keep_dimensions = st.checkbox("Keep dimensions", value=_DEFAULTS.keep_dimensions)
    force_crop = st.checkbox("Force crop", value=_DEFAULTS.force_crop)
    center_crop = st.checkbox(
        "Centre crop", value=_DEFAULTS.center_crop, disabled=not force_crop,
    )

st.markdown("---")

# -- Upload ------------------------------------------------------------
uploaded = st.file_uploader(
    "Select image",
    type=[ext.lstrip(".") for ext in sorted(_DEFAULTS.SUPPORTED_EXTENSIONS)],
)

# Persist upload in session state so control changes don't clear it
if uploaded is not None:
    st.session_state.uploaded_data = uploaded.getvalue()
    st.session_state.uploaded_name = uploaded.name
elif "uploaded_data" not in st.session_state:
    st.session_state.uploaded_data = None

if st.session_state.uploaded_data is not None:
    try:
        original = load_raster(io.BytesIO(st.session_state.uploaded_data))
        result = pixelate_raster(
            original, scale,
            keep_dimensions=keep_dimensions,
            force_crop=force_crop,
            center_crop=center_crop,
        )
    except PixelatorError as err:
        st.error(str(err))
        st.stop()

    left, right = st.columns(2)
    with left:
        st.image(_add_passepartout(_preview(original)), use_container_width=True)
        st.caption(f"Original  {original.shape[1]} x {original.shape[0]}")
    with right:
        st.image(_add_passepartout(_preview(result)), use_container_width=True)
        st.caption(f"Pixelated  {result.shape[1]} x {result.shape[0]}")

    _, dl_col, _ = st.columns([1, 2, 1])
    with dl_col:
        st.download_button(
            "DOWNLOAD PNG",
            data=_to_png(result),
            file_name=f"{_DEFAULTS.output_prefix}{Path(st.session_state.uploaded_name).stem}.png",
            mime="image/png",
            use_container_width=True,
        )
