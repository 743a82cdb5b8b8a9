from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from mock_interviewer.errors import CameraAccessDenied
from mock_interviewer.infrastructure.vision import CameraStream, YoloClassifier


def _capture(opened=True, frame=None):
    capture = MagicMock()
    capture.isOpened.return_value = opened
    capture.read.return_value = (frame is not None, frame)
    return capture


class TestCameraStream:
    def test_open_read_release(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        capture = _capture(frame=frame)
        with patch("mock_interviewer.infrastructure.vision.camera.cv2.VideoCapture", return_value=capture) as ctor:
            camera = CameraStream(device_index=1)
            camera.open()
            camera.open()

            assert ctor.call_count == 1
            assert camera.is_open
            assert camera.read_frame() is frame

            camera.release()
            camera.release()

        assert capture.release.call_count == 1
        assert not camera.is_open
        assert camera.read_frame() is None

    def test_unopenable_camera(self):
        capture = _capture(opened=False)
        with patch("mock_interviewer.infrastructure.vision.camera.cv2.VideoCapture", return_value=capture):
            camera = CameraStream()
            with pytest.raises(CameraAccessDenied):
                camera.open()
        assert not camera.is_open
        capture.release.assert_called_once()

    def test_failed_read(self):
        with patch("mock_interviewer.infrastructure.vision.camera.cv2.VideoCapture", return_value=_capture()):
            camera = CameraStream()
            camera.open()
            assert camera.read_frame() is None


class TestYoloClassifier:
    def test_classify_before_load(self):
        with pytest.raises(RuntimeError):
            YoloClassifier().classify(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_classify_maps_class_names(self):
        boxes = [
            SimpleNamespace(cls=[67], conf=[0.91]),
            SimpleNamespace(cls=[0], conf=[0.99]),
        ]
        model = MagicMock(return_value=[SimpleNamespace(boxes=boxes)])
        model.names = {0: "person", 67: "cell phone"}

        classifier = YoloClassifier()
        classifier._model = model
        predictions = classifier.classify(np.zeros((2, 2, 3), dtype=np.uint8))

        assert predictions == [("cell phone", 0.91), ("person", 0.99)]
        assert model.call_args.kwargs["verbose"] is False
