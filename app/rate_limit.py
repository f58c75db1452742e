# app/rate_limit.py
import threading
import time

from flask import jsonify, request


class RateLimiter:
    """Fixed-window request counter kept in process memory, keyed by client address."""

    def __init__(self, limit, window_seconds=60, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock
        self._lock = threading.Lock()
        self._windows = {}
        self._compacted = None

    def hit(self, key):
        """Count one request for `key`; False once the current window is full."""
        now = self.clock()
        window = int(now // self.window_seconds)
        with self._lock:
            if self._compacted != window:
                # drop finished windows once per window so the map stays bounded by active clients
                self._windows = {k: v for k, v in self._windows.items() if v[0] == window}
                self._compacted = window
            current, count = self._windows.get(key, (window, 0))
            if current != window:
                count = 0
            if count >= self.limit:
                self._windows[key] = (window, count)
                return False
            self._windows[key] = (window, count + 1)
            return True

    def init_app(self, app):
        @app.before_request
        def _limit():
            if not self.hit(request.remote_addr or "unknown"):
                return jsonify({"error": "Rate limit exceeded"}), 429
            return None
