"""Matomo Tracking API constants."""

# Appended to the normalized url base when no explicit tracker url is given
DEFAULT_TRACKER_PATH = "matomo.php"

# Fixed body parameters sent with every hit (siteId and uid are added per tracker)
REC = 1
API_VERSION = 1
SEND_IMAGE = 0

HEADER_ACCEPT = "application/json"
HEADER_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"

# Moved from the body into the Accept-Language header
LANG_PARAM = "lang"
USER_ID_PARAM = "uid"

APP_START_ACTION = "App / start"
SCREEN_ACTION_PREFIX = "Screen / "
