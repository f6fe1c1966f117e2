"""numberones - UK number one singles for every birthday since you were born."""

__version__ = "1.0.0"
