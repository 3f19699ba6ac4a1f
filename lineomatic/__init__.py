"""Line-O-Matic: transit line section management for AI agents."""

__version__ = "0.1.0"
