"""Core configuration and constants.

Import what you need from `gadget_news.core.config` and
`gadget_news.core.constants` to avoid heavy side effects at import time.
"""

__all__ = ["config", "constants"]
