from .resource import NvrResource


class NvrLocation(NvrResource):

    @property
    def description(self):
        return self._load("description", "")

    @property
    def is_system(self):
        """Returns `True` if the server won't let this location be deleted."""
        return bool(self._load("is_system", False))


class NvrArea(NvrResource):

    @property
    def location_id(self):
        return self._attrs.get("location_id", None)

    @property
    def location_name(self):
        return self._load("location_name", "")

    @property
    def description(self):
        return self._load("description", "")
