import os
import logging
import platform

logger = logging.getLogger(__name__)

# --- USER DATA (PRIVATE STORAGE) ---
APP_NAME = "MPH_Pitch_Tracking"
HOME_ENV_VAR = "PITCH_TRACKER_HOME"

DB_FILE_NAME = "pitchTracker.sqlite3"
EXPORT_PREFIX = "pitch_data_"


def default_user_data_dir():
    """Standard per-user data directory for the current OS."""
    override = os.getenv(HOME_ENV_VAR)
    if override:
        return os.path.abspath(os.path.expanduser(override))

    if platform.system() == "Windows":
        root = os.getenv('LOCALAPPDATA') or os.path.expanduser('~')
        return os.path.join(root, APP_NAME)
    elif platform.system() == "Darwin": # macOS
        return os.path.join(os.path.expanduser('~'), 'Library', 'Application Support', APP_NAME)
    else: # Linux/Unix
        return os.path.join(os.path.expanduser('~'), '.local', 'share', APP_NAME)


def ensure_user_data_dir(path=None):
    """Create the data directory, falling back to ./saves if permission is denied.

    If neither can be created the fallback path is still returned; the store
    opened on it reports itself as not ready.
    """
    target = path or default_user_data_dir()
    try:
        os.makedirs(target, exist_ok=True)
    except OSError:
        target = os.path.join(os.getcwd(), "saves")
        try:
            os.makedirs(target, exist_ok=True)
        except OSError:
            logger.warning("Could not create data directory %s", target)
    return target


def db_path_for(data_dir):
    return os.path.join(data_dir, DB_FILE_NAME)


USER_DATA_DIR = default_user_data_dir()

DB_PATH = db_path_for(USER_DATA_DIR)
