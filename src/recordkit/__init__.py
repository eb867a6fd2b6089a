"""recordkit — validated record contracts and the tooling around them."""

__version__ = "0.1.0"
