class DiffConfig:
    """Set of options to pass around while diffing"""

    def __init__(self, *, atomic_paths=None, detect_moves=True,
                 similarity_threshold=0.5, maxlen=None):
        self._atomic_paths = atomic_paths or {}
        self.detect_moves = detect_moves
        self.similarity_threshold = similarity_threshold
        self.maxlen = maxlen

    def is_atomic(self, x, path=None):
        "Return True for values that diff should treat as a single atomic value."
        try:
            return self._atomic_paths[path]
        except KeyError:
            return not isinstance(x, (list, dict))

    def is_similar(self, x, y, path=None):
        """Return True if two sequence items are alike enough to be
        reported as a modification rather than a removal and an addition.
        """
        from .generic import compare_values_approximate
        if type(x) is not type(y) or self.is_atomic(x, path):
            return False
        return compare_values_approximate(
            x, y, threshold=self.similarity_threshold, maxlen=self.maxlen)

    def __copy__(self):
        return DiffConfig(
            atomic_paths=self._atomic_paths.copy(),
            detect_moves=self.detect_moves,
            similarity_threshold=self.similarity_threshold,
            maxlen=self.maxlen,
        )
