"""
Webcam access through OpenCV.
"""
import logging
from typing import Optional

import cv2
import numpy as np

from ...config import CAMERA_INDEX, CAMERA_WIDTH, CAMERA_HEIGHT
from ...errors import CameraAccessDenied

logger = logging.getLogger("camera")


class CameraStream:
    """
    Owns a single cv2.VideoCapture handle.

    open() and release() are idempotent; read_frame() returns None when no
    frame is available instead of raising.
    """

    def __init__(self,
                 device_index: int = CAMERA_INDEX,
                 width: int = CAMERA_WIDTH,
                 height: int = CAMERA_HEIGHT):
        self.device_index = device_index
        self.width = width
        self.height = height
        self._capture: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> None:
        """Acquire the camera. Raises CameraAccessDenied if it cannot be opened."""
        if self._capture is not None:
            return

        capture = cv2.VideoCapture(self.device_index)
        if not capture.isOpened():
            capture.release()
            logger.error("Could not open camera %s", self.device_index)
            raise CameraAccessDenied(f"Camera {self.device_index} could not be opened")

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._capture = capture
        logger.info("Camera %s opened at %dx%d", self.device_index, self.width, self.height)

    def read_frame(self) -> Optional[np.ndarray]:
        """Grab the current BGR frame."""
        if self._capture is None:
            return None
        ok, frame = self._capture.read()
        if not ok or frame is None:
            logger.debug("Camera returned no frame")
            return None
        return frame

    def release(self) -> None:
        if self._capture is None:
            return
        self._capture.release()
        self._capture = None
        logger.info("Camera %s released", self.device_index)
