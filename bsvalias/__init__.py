__name__ = "bsvalias"
__version__ = "0.1.0"
