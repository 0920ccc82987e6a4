"""Amazon SES mail adapter."""

from .client import MockMailSender, SesMailSender

__all__ = ["MockMailSender", "SesMailSender"]
