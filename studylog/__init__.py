"""Daily study log → static week/month site."""

__version__ = "0.1.0"
