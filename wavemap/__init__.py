"""wavemap - Wave Function Collapse tile maps learned from example grids."""

__version__ = "0.1.0"
