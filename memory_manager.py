from types import MappingProxyType


class PhysicalMemory:
    def __init__(self, num_frames):
        if isinstance(num_frames, bool) or not isinstance(num_frames, int):
            raise TypeError(f"num_frames must be an int, got {num_frames!r}")
        if num_frames < 1:
            raise ValueError(f"num_frames must be at least 1, got {num_frames}")
        self.num_frames = num_frames
        # Each frame stores a page id or None if free
        self.frames = [None] * num_frames
        # Mirrors frame occupancy for constant time lookups
        self.resident = set()
        # Frames are never freed during a run, so they fill up in order
        self.next_free = 0

    def find_free_frame(self):
        if self.next_free < self.num_frames:
            return self.next_free
        return None

    def allocate_frame(self, frame_num, page):
        evicted = self.frames[frame_num]
        if evicted is not None:
            self.resident.discard(evicted)
        elif frame_num == self.next_free:
            self.next_free += 1
        self.frames[frame_num] = page
        self.resident.add(page)
        return evicted

    def contains(self, page):
        return page in self.resident

    def resident_pages(self):
        """Occupied frames in slot order."""
        return tuple(page for page in self.frames if page is not None)


class SimulationResult:
    def __init__(self, page_faults, load_counts):
        self.page_faults = page_faults
        self.load_counts = MappingProxyType(dict(load_counts))

    def __eq__(self, other):
        if not isinstance(other, SimulationResult):
            return NotImplemented
        return (self.page_faults == other.page_faults
                and dict(self.load_counts) == dict(other.load_counts))

    def __repr__(self):
        return (f"SimulationResult(page_faults={self.page_faults}, "
                f"load_counts={dict(self.load_counts)!r})")


class Statistics:
    def __init__(self):
        self.page_faults = 0
        self.load_counts = {}

    def record_page_fault(self, page):
        self.page_faults += 1
        self.load_counts[page] = self.load_counts.get(page, 0) + 1

    def result(self):
        return SimulationResult(self.page_faults, self.load_counts)
