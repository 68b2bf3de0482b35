# Importing the source modules registers them
from . import yc_companies  # noqa: F401
