"""wavu — install WebAssembly runtimes side by side."""

__version__ = "0.1.0"
