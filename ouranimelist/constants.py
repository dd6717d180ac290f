import os

CONFIG_DIR = os.environ.get("OUR_ANIME_LIST_CONFIG_DIR", os.path.join(os.getcwd(), "config"))
DB_FILE = os.path.join(CONFIG_DIR, "ouranimelist.db")
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.yaml")

OUR_ANIME_LIST_DB = "sqlite:///" + DB_FILE

BUILD_VERSION = "0.3.0"

# Index order matters: it is the weekday() value of datetime.date
DAYS_OF_WEEK = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

# Audit action labels
ACTION_ADD = "add"
ACTION_DELETE = "delete"
ACTION_UPDATE_CURRENT_EPISODES = "update-current-episodes"
ACTION_UPDATE_TOTAL_EPISODES = "update-total-episodes"
ACTION_UPDATE_RELEASE_DAY = "update-release-day"
ACTION_UPDATE_RELEASE_TIME = "update-release-time"

AUDIT_ACTIONS = [
    ACTION_ADD,
    ACTION_DELETE,
    ACTION_UPDATE_CURRENT_EPISODES,
    ACTION_UPDATE_TOTAL_EPISODES,
    ACTION_UPDATE_RELEASE_DAY,
    ACTION_UPDATE_RELEASE_TIME,
]

# Sortable UTC form used for audit timestamps
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

ATTACK_DETECTED_EVENT = "attack_detected"

DEFAULT_SETTINGS = {
    "monitor": {
        "enabled": True,
        "interval_seconds": 10,
        "threshold": 10,
    },
    "network": {
        "probe_url": "https://www.google.com",
        "timeout_seconds": 3,
    },
    "pagination": {
        "default_page_size": 20,
        "max_page_size": 100,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8465,
    },
}
