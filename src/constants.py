"""
Global constants for Apache Index Image Viewer.
Contains path configuration, display settings, request defaults and messages.
"""

import os

# **************************************************************** #
#                       Build Info                                     #
# **************************************************************** #
APP_VERSION = "dev"
APP_TITLE = "Apache Index Image Viewer"

# **************************************************************** #
#                       Environment Detection                        #
# **************************************************************** #
DEV_MODE = os.getenv("DEV_MODE", "false").lower() == "true"

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))

# **************************************************************** #
#                       Path Configuration                           #
# **************************************************************** #
if DEV_MODE:
    TEMP_LOG_DIR = os.path.join(SCRIPT_DIR, "..", "workdir")
    CONFIG_FILE = os.path.join(SCRIPT_DIR, "..", "workdir", "config.json")
else:
    TEMP_LOG_DIR = SCRIPT_DIR
    CONFIG_FILE = os.path.join(SCRIPT_DIR, "config.json")

LOG_FILE = os.path.join(TEMP_LOG_DIR, "error.log")

# **************************************************************** #
#                       Display Settings                             #
# **************************************************************** #
FPS = 30
SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768

# **************************************************************** #
#                       Index Parsing                                #
# **************************************************************** #
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp")

# **************************************************************** #
#                       Network                                      #
# **************************************************************** #
REQUEST_TIMEOUT = 10  # seconds
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# **************************************************************** #
#                       Image Cache                                  #
# **************************************************************** #
IMAGE_CACHE_LIMIT = 16  # decoded surfaces kept in memory

# **************************************************************** #
#                       Messages                                     #
# **************************************************************** #
ERROR_LOADING_MESSAGE = "Error loading images"
NO_IMAGES_MESSAGE = "No images found"
IMAGE_LOAD_FAILED_MESSAGE = "Could not load image"
