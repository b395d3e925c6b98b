from .resource import NvrResource


class NvrCapture(NvrResource):
    """A screenshot or clip taken from a camera."""

    @property
    def name(self):
        return self.camera_name

    @property
    def camera_id(self):
        return self._attrs.get("camera_id", None)

    @property
    def camera_name(self):
        return self._load("camera_name", "")

    @property
    def capture_type(self):
        return self._load("capture_type", "")

    @property
    def file_path(self):
        return self._load("file_path", "")

    @property
    def file_size(self):
        return self._load("file_size", 0)
