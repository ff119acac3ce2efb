"""HTTP middleware: request size limit and request ID.

Added in clinidocs.main.create_app(); the last one added runs outermost.
"""

from clinidocs.middleware.request_id import RequestIDMiddleware
from clinidocs.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
]
