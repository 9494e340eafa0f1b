"""quickreq - lightweight HTTP request composer and tester."""

__version__ = "0.1.0"
