# Model package init
from .levels import LevelsBlob  # noqa: F401 re-export

__all__ = ["LevelsBlob"]
