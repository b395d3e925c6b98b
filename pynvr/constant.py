# Server.
DEFAULT_HOST = "http://localhost:8080"

# Auth paths.
LOGIN_PATH = "/auth/login"
LOGOUT_PATH = "/auth/logout"
LOGIN_PAGE_PATH = "/login"

# Resource paths.
CAMERAS_PATH = "/api/cameras"
CAMERA_SYNC_PATH = CAMERAS_PATH + "/sync"
CAMERA_STATUS_PATH = CAMERAS_PATH + "/status"
CAMERA_THUMBNAIL_PATH = CAMERAS_PATH + "/{}/thumbnail"
LOCATIONS_PATH = "/api/locations"
AREAS_PATH = "/api/areas"
MOSAICS_PATH = "/api/mosaics"
MOSAIC_START_PATH = MOSAICS_PATH + "/{}/start"
MOSAIC_STOP_PATH = MOSAICS_PATH + "/{}/stop"
USERS_PATH = "/api/users"
ROLES_PATH = "/api/roles"
CAPTURES_PATH = "/api/captures"
SCREENSHOT_PATH = CAPTURES_PATH + "/screenshot/{}"
THUMBNAIL_SETTING_PATH = CAPTURES_PATH + "/thumbnails/setting"
THUMBNAIL_TOGGLE_PATH = CAPTURES_PATH + "/thumbnails/toggle"
NOTIFICATIONS_PATH = "/api/notifications"
NOTIFICATION_SUMMARY_PATH = NOTIFICATIONS_PATH + "/summary"
NOTIFICATION_READ_PATH = NOTIFICATIONS_PATH + "/{}/read"
NOTIFICATION_READ_ALL_PATH = NOTIFICATIONS_PATH + "/read-all"
SHARES_PATH = "/api/shares"
SHARE_TOGGLE_PATH = SHARES_PATH + "/{}/toggle"

# Session.
AUTH_SCHEME_COOKIE = "cookie"
AUTH_SCHEME_BEARER = "bearer"
DEFAULT_SESSION_COOKIE = "session"
TOKEN_KEY = "jwt_token"
THEME_KEY = "theme"

# Timings, in seconds.
DEFAULT_TOAST_TIMEOUT = 3.5
DEFAULT_POLL_INTERVAL = 30

# Toast severities.
TOAST_SUCCESS = "success"
TOAST_ERROR = "error"
TOAST_INFO = "info"
TOAST_SEVERITIES = [TOAST_SUCCESS, TOAST_ERROR, TOAST_INFO]

# Camera states.
STATUS_ONLINE = "online"
STATUS_OFFLINE = "offline"
STATUS_DISABLED = "disabled"

# Themes.
THEME_DARK = "dark"
THEME_LIGHT = "light"

# Resource kinds, these double as the collection names in NvrObjects.
CAMERAS = "cameras"
LOCATIONS = "locations"
AREAS = "areas"
MOSAICS = "mosaics"
USERS = "users"
ROLES = "roles"
CAPTURES = "captures"
NOTIFICATIONS = "notifications"
SHARES = "shares"
RESOURCE_KINDS = [CAMERAS, LOCATIONS, AREAS, MOSAICS, USERS, ROLES, CAPTURES, NOTIFICATIONS, SHARES]

# Store attributes that aren't collections.
FILTERED_CAMERAS = "filtered_cameras"
CAMERA_STATUS = "camera_status"
UNREAD_COUNT = "unread_count"
THUMBNAILS_ENABLED = "thumbnails_enabled"

# User facing messages.
MSG_CONNECTION_ERROR = "Connection error"
MSG_SESSION_EXPIRED = "Session expired, please log in again"
MSG_INVALID_CREDENTIALS = "Invalid credentials"
MSG_SERVER_CONNECTION_ERROR = "Could not connect to the server"
MSG_ERROR = "Error"
MSG_DELETE_ERROR = "Error deleting"
MSG_SYSTEM_LOCATION = "System locations cannot be deleted"
MSG_SYSTEM_ROLE = "System roles cannot be deleted"
MSG_SYNCING = "Syncing..."
MSG_SYNCED = "Synced"
MSG_MOSAIC_STARTING = "Starting mosaic..."
MSG_MOSAIC_STARTED = "Mosaic started"
MSG_MOSAIC_STOPPED = "Mosaic stopped"
MSG_SCREENSHOT_TAKEN = "Screenshot captured"
MSG_SCREENSHOT_ERROR = "Error capturing screenshot"
MSG_THUMBNAILS_ON = "Thumbnails enabled"
MSG_THUMBNAILS_OFF = "Thumbnails disabled"
MSG_SHARE_TOGGLED = "Share link updated"
MSG_ALL_READ = "All notifications marked as read"

# Per resource messages: load failure, created, updated, deleted, save failure.
RESOURCE_MESSAGES = {
    CAMERAS: ("Error loading cameras", "Camera created", "Camera updated", "Camera deleted",
              "Error saving camera"),
    LOCATIONS: ("Error loading locations", "Location created", "Location updated", "Location deleted",
                "Error saving location"),
    AREAS: ("Error loading areas", "Area created", "Area updated", "Area deleted",
            "Error saving area"),
    MOSAICS: ("Error loading mosaics", "Mosaic created", "Mosaic updated", "Mosaic deleted",
              "Error saving mosaic"),
    USERS: ("Error loading users", "User created", "User updated", "User deleted",
            "Error saving user"),
    ROLES: ("Error loading roles", "Role created", "Role updated", "Role deleted",
            "Error saving role"),
    CAPTURES: ("Error loading captures", None, None, "Capture deleted", None),
    NOTIFICATIONS: ("Error loading notifications", None, None, "Notification deleted", None),
    SHARES: ("Error loading share links", "Share link created", None, "Share link deleted",
             "Error creating share link"),
}
