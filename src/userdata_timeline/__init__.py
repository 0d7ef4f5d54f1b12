"""userdata-timeline — local history for editor settings and keybindings."""

__version__ = "0.1.0"
