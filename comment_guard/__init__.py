"""Comment guard: flags discouraged keywords (hack, todo, fixme) in source comments."""

__version__ = "1.0.0"
