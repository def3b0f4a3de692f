"""
Third-party integrations.
"""

from transjson.integrations.sentry import init_sentry, capture_exception, set_tag

__all__ = [
    "init_sentry",
    "capture_exception",
    "set_tag",
]
