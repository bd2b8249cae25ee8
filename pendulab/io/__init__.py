"""Input/output: config files and synthetic frame streams."""

from pendulab.io.serializers import load_config, save_config
from pendulab.io.streams import FrameStream

__all__ = ["FrameStream", "save_config", "load_config"]
