"""
Patch Annotator - interactive bounding box annotation for patch datasets.

Built with PyQt6. An operator marks rectangles on each image of a
directory with one of several mouse gestures, and every rectangle is
cropped and saved as a numbered patch for object-detection training.
"""

__version__ = "1.0.0"
__author__ = "Patch Annotator Team"
