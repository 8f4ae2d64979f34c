"""Building blocks of an ed-style line editor: buffer, macros, UI and IO."""

__version__ = "0.14.0"

__all__ = ["buffer", "errors", "io", "local_io", "macros", "substitute", "ui"]