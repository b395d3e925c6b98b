from .resource import NvrResource


class NvrNotification(NvrResource):

    @property
    def name(self):
        return self.title

    @property
    def category(self):
        return self._load("category", "")

    @property
    def title(self):
        return self._load("title", "")

    @property
    def message(self):
        return self._load("message", "")

    @property
    def severity(self):
        return self._load("severity", "info")

    @property
    def read(self):
        return bool(self._load("read", False))

    def as_read(self):
        """Returns a copy of this notification flagged as read."""
        attrs = self.to_json()
        attrs["read"] = True
        return NvrNotification(attrs)
