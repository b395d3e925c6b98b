class NvrError(Exception):
    """Base class for everything the API client raises."""


class NvrConnectionError(NvrError):
    """The request never produced a usable answer.

    Covers unreachable servers, transport errors and bodies that aren't JSON.
    """


class NvrAuthError(NvrError):
    """The session is gone. A logout has already been forced."""


class NvrNoCredentialError(NvrAuthError):
    pass


class NvrSessionExpiredError(NvrAuthError):
    pass
