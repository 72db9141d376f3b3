"""HTTP middleware: request timeout and request ID.

Applied in create_app; order matters (last added = outermost).
"""

from eventlink.middleware.request_id import RequestIDMiddleware
from eventlink.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
