"""Building blocks for compiling MML music into VGM files, and a VGM file reader."""

__version__ = "0.1.0"