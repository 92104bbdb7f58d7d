"""
Application Configuration - Central place for library identity
Change these values when renaming the library
"""

# Library Identity
APP_NAME = "CamConfig"

# Directory names (used for app data paths)
APP_DATA_FOLDER = APP_NAME  # %LOCALAPPDATA%\{APP_DATA_FOLDER} or ~/.{APP_DATA_FOLDER}

# File names
MAIN_CONFIG_FILE = "config.json"
LOG_FILE = "camconfig.log"
