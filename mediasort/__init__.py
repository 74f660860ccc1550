"""
mediasort - Sort photos and videos into a year/month folder structure.

Moves or copies media files from a source tree into target/<year>/<month>
based on their capture date, resolving name conflicts at the target safely.

MIT License.
"""

__version__ = "1.0.0"
__copyright__ = "Copyright (c) 2026 the mediasort contributors"


# Public API
from .cli import main
from .config import Config
from .core import MediaSorter
from .dates import DateResolver
from .file_operations import Relocator
from .placement import PlacementResolver
from .prompts import ConsolePrompter, DecisionProvider
from .timestamps import MetadataReader

__all__ = [ "main", "Config", "MediaSorter", "DateResolver", "Relocator", "PlacementResolver",
            "ConsolePrompter", "DecisionProvider", "MetadataReader" ]
