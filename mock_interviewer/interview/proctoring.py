"""
Webcam proctoring: periodic frame classification with debounced warnings.
"""
import logging
import threading
import time
from typing import Callable, List, Optional, Sequence

from .models import DetectedDevice
from ..config import (
    SAMPLE_INTERVAL_SECONDS, WARNING_DEBOUNCE_SECONDS, DETECTION_CONFIDENCE, SUSPICIOUS_OBJECTS,
)

logger = logging.getLogger("proctoring")

DeviceWarningHandler = Callable[[List[str]], None]


def is_suspicious(label: str, score: float, threshold: float = DETECTION_CONFIDENCE) -> bool:
    """True for a label naming a suspicious object seen with confidence above threshold."""
    lowered = (label or "").lower()
    return score > threshold and any(obj in lowered for obj in SUSPICIOUS_OBJECTS)


class ProctoringSampler:
    """
    Owns the camera and classifier for one interview.

    start() opens the camera and launches a background loop that loads the
    model (if needed) and then calls sample_once() every `interval` seconds.
    Device-warning handlers run synchronously on the loop thread.
    """

    def __init__(self,
                 camera=None,
                 classifier=None,
                 interval: float = SAMPLE_INTERVAL_SECONDS,
                 debounce: float = WARNING_DEBOUNCE_SECONDS,
                 threshold: float = DETECTION_CONFIDENCE,
                 clock: Callable[[], float] = time.monotonic,
                 wall_clock: Callable[[], float] = time.time):
        if camera is None:
            from ..infrastructure.vision import CameraStream
            camera = CameraStream()
        if classifier is None:
            from ..infrastructure.vision import YoloClassifier
            classifier = YoloClassifier()

        self.camera = camera
        self.classifier = classifier
        self.interval = interval
        self.debounce = debounce
        self.threshold = threshold
        self.clock = clock
        self.wall_clock = wall_clock

        self.enabled = False
        self.model_ready = False
        self.last_warning_timestamp: Optional[float] = None
        self.detected_devices: List[DetectedDevice] = []
        self.warning_count = 0

        self._detector_available = False
        self._handlers: List[DeviceWarningHandler] = []
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._load_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, handler: DeviceWarningHandler) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def unsubscribe(self, handler: DeviceWarningHandler) -> None:
        with self._lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load_model(self) -> None:
        """
        Load the classifier. A load failure still marks the sampler ready;
        it just never detects anything.
        """
        with self._load_lock:
            if self.model_ready:
                return
            loader = getattr(self.classifier, "load", None)
            try:
                if loader is not None:
                    loader()
                self._detector_available = True
                logger.info("Object detection model loaded")
            except Exception as e:
                self._detector_available = False
                logger.error("Failed to load object detection model: %s", e)
            self.model_ready = True

    def start(self) -> None:
        """
        Acquire the camera and begin sampling.

        Raises:
            CameraAccessDenied: the camera could not be opened
        """
        with self._lock:
            if self.enabled:
                return
            self.camera.open()
            self.enabled = True
            # Per-run event; a loop left over from an earlier run keeps its own, already set
            self._stop_event = threading.Event()
            self._thread = threading.Thread(target=self._run, args=(self._stop_event,),
                                            name="proctoring-sampler", daemon=True)
            self._thread.start()
        logger.info("Device detection started")

    def stop(self) -> None:
        """Halt the loop and release the camera. Safe to call at any time."""
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
            was_enabled = self.enabled
            self.enabled = False

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(self.interval, 1.0) * 2)
        self.camera.release()
        if was_enabled:
            logger.info("Device detection stopped")

    def _run(self, stop_event: threading.Event) -> None:
        self.load_model()
        if not self._detector_available:
            logger.warning("Proctoring camera active without object detection")
        while not stop_event.wait(self.interval):
            self.sample_once()

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def sample_once(self) -> Optional[List[str]]:
        """
        Classify the current frame and raise at most one debounced warning.

        Returns:
            The distinct suspicious labels if a warning was raised, else None
        """
        if not self.enabled or not self._detector_available:
            return None

        frame = self.camera.read_frame()
        if frame is None:
            return None

        try:
            predictions = self.classifier.classify(frame)
        except Exception as e:
            logger.error("Detection error: %s", e)
            return None

        matches = [(label, float(score)) for label, score in predictions
                   if is_suspicious(label, float(score), self.threshold)]
        if not matches:
            return None

        now = self.clock()
        if self.last_warning_timestamp is not None and now - self.last_warning_timestamp < self.debounce:
            logger.debug("Suppressed warning for %s (debounce)", [m[0] for m in matches])
            return None

        return self._raise_warning(matches, now)

    def _raise_warning(self, matches: Sequence[tuple], now: float) -> List[str]:
        labels: List[str] = []
        first_scores = {}
        for label, score in matches:
            if label not in first_scores:
                labels.append(label)
                first_scores[label] = score

        timestamp_ms = int(self.wall_clock() * 1000)
        self.detected_devices.extend(
            DetectedDevice(label=label, score=first_scores[label], timestamp=timestamp_ms) for label in labels
        )
        self.warning_count += 1
        self.last_warning_timestamp = now
        logger.warning("Suspicious device detected: %s", ", ".join(labels))

        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(list(labels))
            except Exception as e:
                logger.error("Device warning handler failed: %s", e)
        return labels
