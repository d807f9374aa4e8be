"""Object Design Linter: static checks for object-oriented design guidelines."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
