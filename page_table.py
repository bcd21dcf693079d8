def build_position_index(trace):
    """Map every page to the ascending list of trace positions it appears at."""
    positions = {}
    for i, page in enumerate(trace):
        positions.setdefault(page, []).append(i)
    return positions


class ForwardCursors:
    def __init__(self, position_index):
        self.position_index = position_index
        # page -> index into position_index[page] of the next unconsumed use
        self.cursors = {}

    def cursor(self, page):
        return self.cursors.get(page, 0)

    def next_use(self, page, now):
        """
        Return the next trace position after `now` where `page` is referenced,
        or None if it is never referenced again.
        """
        positions = self.position_index.get(page, ())
        cursor = self.cursors.get(page, 0)

        # Skip everything at or before the current step
        while cursor < len(positions) and positions[cursor] <= now:
            cursor += 1
        self.cursors[page] = cursor

        if cursor < len(positions):
            return positions[cursor]
        return None
