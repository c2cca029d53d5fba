"""
Request cloning for auth transports.
"""
import httpx


def clone_request(request: httpx.Request) -> httpx.Request:
    """
    Return a shallow copy of ``request`` with its own header collection.

    URL, stream and extensions (including the timeout) are shared with the
    original; only the headers are copied.
    """
    # copy.copy would go through Request.__getstate__, which drops the stream
    clone = httpx.Request.__new__(httpx.Request)
    clone.__dict__.update(request.__dict__)
    clone.headers = request.headers.copy()
    return clone
