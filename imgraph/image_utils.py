"""
Reading and writing images with OpenCV.
"""

import os
import logging
from os.path import dirname

import cv2
import numpy as np

from .constants import C

logger = logging.getLogger(__name__)


class NotImageError(RuntimeError):
    """cv2 cannot read or write the image"""


def mkdirs(path):
    logger.debug("mkdirs %s",path)
    os.makedirs(path, exist_ok = True)


def image_read(path):
    """Read an image as BGR. Grayscale images are converted so every image has three channels."""
    assert path is not None
    with open(path,"rb") as f:
        data = f.read()
    img = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_ANYCOLOR)
    if img is None:
        raise NotImageError("cannot read: "+path)
    if len(img.shape)==2:
        img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    return img


def image_write(path, img, jpeg_quality=C.DEFAULT_JPEG_QUALITY):
    """Write img in the format given by the extension of path."""
    ext = os.path.splitext(path)[1].lower()
    if not ext:
        raise NotImageError(f"no extension to choose a format from: {path}")
    params = []
    if ext in ('.jpg', '.jpeg'):
        params = [cv2.IMWRITE_JPEG_QUALITY, jpeg_quality]
    (ok, buf) = cv2.imencode(ext, img, params)
    if not ok:
        raise NotImageError(f"cannot encode image as {ext}: {path}")
    if dirname(path):
        mkdirs(dirname(path))
    logger.debug("write %s %s",path,img.shape)
    with open(path,"wb") as f:
        f.write(buf.tobytes())
