"""backlightd: idle, ambient light and power aware backlight daemon."""

__version__ = "0.3.0"
