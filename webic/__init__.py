"""webic -- scaffold static web apps and build them with a fixed asset pipeline."""

__version__ = "1.0.0"
