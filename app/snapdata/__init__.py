"""snapdata - lifecycle management for per-user package data directories.

Copies revision data forward on upgrade (with rollback through a trash
area) and migrates per-user data between the exposed ``~/snap`` layout
and the hidden ``~/.snap/data`` layout.
"""

__version__ = "0.1.0"
