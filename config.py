#######################################
# IMPORTS
#######################################

import os

#######################################
# CONSTANTS
#######################################

LOG_LEVEL = os.getenv('TREELOX_LOG_LEVEL', 'WARNING').upper()

# Deepest chain of interpreted calls before "Stack overflow."
MAX_CALL_DEPTH = int(os.getenv('TREELOX_MAX_CALL_DEPTH', '1000'))

DEFAULT_IMAGE_KEY = 'TreeloxImageKey1234567890abcdefg'
IMAGE_KEY = os.getenv('TREELOX_IMAGE_KEY', DEFAULT_IMAGE_KEY)

# Exit codes used by the command line tools
EXIT_DATA_ERROR = 65
EXIT_SOFTWARE_ERROR = 70
