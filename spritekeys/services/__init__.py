"""Matcher construction, setup codec and key pixel discovery."""

from .profile_builder import build_profiles
from .setup_codec import serialize_setup, parse_setup, save_setup, load_setup
from .matcher import SpriteKeyPixelMatcher
from .discovery import DiscoveryDriver, DiscoveryStats, find_key_pixels, run_trial

__all__ = [
    "build_profiles",
    "serialize_setup", "parse_setup", "save_setup", "load_setup",
    "SpriteKeyPixelMatcher",
    "DiscoveryDriver", "DiscoveryStats", "find_key_pixels", "run_trial",
]
