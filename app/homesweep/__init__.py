"""homesweep - ACL-aware maintenance of user home directories on Windows."""

__version__ = "0.3.0"
