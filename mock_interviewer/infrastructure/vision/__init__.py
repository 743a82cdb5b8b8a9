"""Camera capture and object classification."""

from .camera import CameraStream
from .detector import ObjectClassifier, YoloClassifier, Prediction

__all__ = ["CameraStream", "ObjectClassifier", "YoloClassifier", "Prediction"]
