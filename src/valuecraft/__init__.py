"""valuecraft: encoded element model for immutable value-type generation.

This package provides the normalized member records lifted from encoding
templates, ready to be spliced into generated value classes and builders.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
