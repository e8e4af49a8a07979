"""Map generation for wavemap."""

from .mapgen import build_model, generate_map
from .samples import SAMPLES, get_sample, parse_sample

__all__ = [
    "build_model",
    "generate_map",
    "SAMPLES",
    "get_sample",
    "parse_sample",
]
