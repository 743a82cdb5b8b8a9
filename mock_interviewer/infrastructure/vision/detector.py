"""
Object classification over camera frames.
"""
import logging
from typing import List, Tuple

import numpy as np

from ...config import DETECTOR_WEIGHTS
from ...utils import import_quietly

logger = logging.getLogger("detector")

Prediction = Tuple[str, float]


class ObjectClassifier:
    """Interface: classify(frame) -> list of (label, confidence)."""

    def classify(self, frame: np.ndarray) -> List[Prediction]:
        raise NotImplementedError


class YoloClassifier(ObjectClassifier):
    """COCO object detector backed by an ultralytics YOLO model."""

    def __init__(self, weights: str = DETECTOR_WEIGHTS, min_confidence: float = 0.25):
        self.weights = weights
        self.min_confidence = min_confidence
        self._model = None

    def load(self) -> None:
        """Load the model weights. Raises whatever ultralytics raises."""
        from ultralytics import YOLO

        self._model = import_quietly(lambda: YOLO(self.weights))
        logger.info("YOLO model %s loaded (%d classes)", self.weights, len(self._model.names))

    def classify(self, frame: np.ndarray) -> List[Prediction]:
        if self._model is None:
            raise RuntimeError("YOLO model not loaded")

        results = self._model(frame, conf=self.min_confidence, verbose=False)[0]
        predictions: List[Prediction] = []

        boxes = getattr(results, "boxes", None)
        if boxes is None:
            return predictions

        for box in boxes:
            cls_idx = int(box.cls[0])
            confidence = float(box.conf[0])
            predictions.append((self._model.names[cls_idx], confidence))

        return predictions
