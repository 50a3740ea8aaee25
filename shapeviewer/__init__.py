"""ShapeViewer — renders shape instructions found in chat messages as a PNG grid."""

__version__ = "0.1.0"
