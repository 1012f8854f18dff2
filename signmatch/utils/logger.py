"""
Structured logging with timing and recognition event logging.
"""

import os
import logging
import logging.handlers
import time
from functools import wraps


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure structured logging for the application."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-30s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Remove existing handlers
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    # File handler (rotating)
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class RecognitionLogger:
    """Logs recognition outcomes, near misses, and hand-count warnings.

    Near misses are results that did not match but scored above
    ``near_miss_floor``; they are worth surfacing since they usually mean a
    badly performed or badly recorded sign rather than an unknown one.
    """

    def __init__(self, threshold=0.8, near_miss_floor=0.2, hands_warning_cooldown=3.0,
                 clock=time.monotonic):
        self.logger = logging.getLogger("recognition_events")
        self.threshold = threshold
        self.near_miss_floor = near_miss_floor
        self.hands_warning_cooldown = hands_warning_cooldown
        self._clock = clock
        self._history = []
        self._invalid_count = 0
        self._last_hands_warning = None

    def log_match(self, result):
        """Log a recognised sign."""
        self._record(result.sign_name, result.similarity, matched=True)
        self.logger.info(
            "Sign recognised: %-20s | Similarity: %5.1f%% | Threshold: %5.1f%%",
            result.sign_name,
            result.similarity * 100,
            self.threshold * 100,
        )

    def log_no_match(self, results):
        """Log every near miss among unmatched results.

        Returns:
            Number of near misses logged
        """
        near_misses = [
            r for r in results
            if self.near_miss_floor < r.similarity < self.threshold
        ]
        for r in near_misses:
            self._invalid_count += 1
            self._record(r.sign_name, r.similarity, matched=False)
            self.logger.warning(
                "Sign not valid: %-20s | Similarity: %5.1f%% (< %5.1f%%) | Invalid count: %d",
                r.sign_name,
                r.similarity * 100,
                self.threshold * 100,
                self._invalid_count,
            )
        if not near_misses:
            self.logger.info("No sign recognised")
        return len(near_misses)

    def log_comparison_results(self, results):
        """Log a one-line summary of a ranked result list."""
        matched = [r for r in results if r.similarity >= self.threshold]
        self.logger.info(
            "Comparison: %d results | %d above threshold | best: %s",
            len(results),
            len(matched),
            "%s (%.3f)" % (results[0].sign_name, results[0].similarity) if results else "none",
        )

    def check_hands(self, hands_detected, required_hands):
        """Warn (rate limited) when fewer hands than required are visible.

        Returns:
            True if enough hands are visible
        """
        if hands_detected >= required_hands:
            self.logger.debug("Hands detected: %d/%d", hands_detected, required_hands)
            return True

        now = self._clock()
        if (self._last_hands_warning is None
                or now - self._last_hands_warning > self.hands_warning_cooldown):
            if hands_detected == 0:
                self.logger.error("No hands detected in view (%d required)", required_hands)
            else:
                self.logger.error("Only %d hand(s) detected, %d required",
                                  hands_detected, required_hands)
            self._last_hands_warning = now
        return False

    def _record(self, sign_name, similarity, matched):
        self._history.append({
            "timestamp": time.time(),
            "sign": sign_name,
            "similarity": similarity,
            "matched": matched,
        })

    def get_history(self, last_n=None):
        """Get recent recognition history."""
        if last_n:
            return self._history[-last_n:]
        return self._history.copy()

    @property
    def invalid_count(self):
        return self._invalid_count

    def reset(self):
        """Clear counters and history."""
        self._history.clear()
        self._invalid_count = 0
        self._last_hands_warning = None


def log_timing(func):
    """Decorator to log function execution time."""
    logger = logging.getLogger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s took %.2fms", func.__name__, elapsed)
        return result

    return wrapper
