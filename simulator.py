from memory_manager import PhysicalMemory, Statistics
from page_table import ForwardCursors, build_position_index
from reference_trace import PTE_SIZE, frames_for_memory, parse_memory_size, read_trace
from collections import deque
import argparse
import sys


ALGORITHMS = ('FIFO', 'OPT')
ALGORITHM_NAMES = {'FIFO': 'FIFO', 'OPT': 'Optimal'}

# Didactic output above this many references gets very long
DIDACTIC_WARNING_THRESHOLD = 1000


class StepEvent:
    """What happened at one step of a run, handed to the observer."""

    def __init__(self, algorithm, step, page, hit, evicted, resident):
        self.algorithm = algorithm
        self.step = step
        self.page = page
        self.hit = hit
        self.evicted = evicted  # None on a hit or when a free frame was used
        self.resident = resident

    def __repr__(self):
        return (f"StepEvent(algorithm={self.algorithm!r}, step={self.step}, "
                f"page={self.page!r}, hit={self.hit}, evicted={self.evicted!r}, "
                f"resident={self.resident!r})")


class VirtualMemorySimulator:

    def __init__(self, algorithm='FIFO', num_frames=1, observer=None, position_index=None):
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        self.algorithm = algorithm
        self.num_frames = num_frames
        self.observer = observer
        self.position_index = position_index
        # Builds the frame table, so a bad capacity fails here before any run
        self.reset()

    def reset(self, trace=()):
        self.physical_memory = PhysicalMemory(self.num_frames)
        self.stats = Statistics()
        self.current_time = 0
        # FIFO: frame numbers in the order their pages arrived
        self.fifo_queue = deque()
        self.cursors = None
        if self.algorithm == 'OPT':
            position_index = self.position_index
            if position_index is None:
                position_index = build_position_index(trace)
            self.cursors = ForwardCursors(position_index)

    def handle_memory_reference(self, page):
        if self.physical_memory.contains(page):
            hit = True
            evicted = None
        else:
            hit = False
            evicted = self.handle_page_fault(page)

        if self.observer is not None:
            self.observer(StepEvent(self.algorithm, self.current_time, page,
                                    hit, evicted, self.resident_pages()))

    def handle_page_fault(self, page):
        self.stats.record_page_fault(page)

        frame_num = self.physical_memory.find_free_frame()
        if frame_num is None:
            frame_num = self.select_victim_page()

        evicted = self.physical_memory.allocate_frame(frame_num, page)
        if self.algorithm == 'FIFO':
            self.fifo_queue.append(frame_num)
        return evicted

    def select_victim_page(self):
        if self.algorithm == 'FIFO':
            return self.select_victim_fifo()
        return self.select_victim_optimal()

    def select_victim_fifo(self):
        return self.fifo_queue.popleft()

    def select_victim_optimal(self):
        """
        Optimal algorithm: replace the page that will be used furthest in the
        future, or never again. Ties go to the lowest frame.
        """
        farthest = -1
        victim_frame = 0

        for frame_num, page in enumerate(self.physical_memory.frames):
            next_use = self.cursors.next_use(page, self.current_time)

            # Never used again, nothing can beat it
            if next_use is None:
                return frame_num

            if next_use > farthest:
                farthest = next_use
                victim_frame = frame_num

        return victim_frame

    def resident_pages(self):
        if self.algorithm == 'FIFO':
            frames = self.physical_memory.frames
            return tuple(frames[frame_num] for frame_num in self.fifo_queue)
        return self.physical_memory.resident_pages()

    def run_simulation(self, trace):
        trace = tuple(trace)
        self.reset(trace)

        for i, page in enumerate(trace):
            self.current_time = i
            self.handle_memory_reference(page)

        return self.stats.result()


def run_simulations(trace, num_frames, observer=None, position_index=None):
    """
    Run FIFO and Optimal over the same trace and capacity.

    Returns (fifo_result, optimal_result).
    """
    trace = tuple(trace)
    if position_index is None:
        position_index = build_position_index(trace)

    # Build both first so a bad capacity is rejected before anything runs
    optimal = VirtualMemorySimulator('OPT', num_frames, observer, position_index=position_index)
    fifo = VirtualMemorySimulator('FIFO', num_frames, observer)

    optimal_result = optimal.run_simulation(trace)
    fifo_result = fifo.run_simulation(trace)
    return fifo_result, optimal_result


def efficiency(fifo_result, optimal_result):
    if fifo_result.page_faults == 0:
        return 100.0
    return optimal_result.page_faults / fifo_result.page_faults * 100.0


def print_step(event, out=None):
    out = out if out is not None else sys.stdout
    name = ALGORITHM_NAMES[event.algorithm]
    print(f"\n[{name} - Step {event.step + 1}] Accessing page: {event.page}", file=out)
    if event.hit:
        print("  -> Page found (HIT)!", file=out)
    else:
        print("  -> PAGE FAULT!", file=out)
        if event.evicted is not None:
            print(f"     Evicted page: {event.evicted}", file=out)
        print(f"     Loaded page: {event.page}", file=out)
    resident = list(event.resident)
    if event.algorithm == 'OPT':
        resident.sort()
    print(f"  Memory state: {resident}", file=out)


def format_report(num_frames, distinct_pages, fifo_result, optimal_result):
    table_size = distinct_pages * PTE_SIZE
    lines = [
        "--- SIMULATION RESULT ---",
        f"Physical memory holds {num_frames} pages.",
        f"There are {distinct_pages} distinct pages in the file.",
        f"Estimated page table size (single level): {table_size} bytes "
        f"({distinct_pages} entries * {PTE_SIZE} bytes/entry)",
        f"With the Optimal algorithm {optimal_result.page_faults} page faults occur.",
        f"With the FIFO algorithm {fifo_result.page_faults} page faults occur,",
        f"reaching {efficiency(fifo_result, optimal_result):.2f}% of Optimal's performance.",
    ]
    return "\n".join(lines)


def format_load_table(fifo_result, optimal_result):
    pages = sorted(set(fifo_result.load_counts) | set(optimal_result.load_counts))
    lines = [
        "Page\tOptimal\tFIFO",
        "----\t-------\t----",
    ]
    for page in pages:
        lines.append(f"{page}\t{optimal_result.load_counts.get(page, 0)}"
                     f"\t{fifo_result.load_counts.get(page, 0)}")
    return "\n".join(lines)


def ask_yes_no(prompt):
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ('y', 'yes', 's')


def build_parser():
    parser = argparse.ArgumentParser(
        description='Compare FIFO and Optimal page replacement on a reference trace')
    parser.add_argument('--didactic', action='store_true',
                        help='Print every step of both simulations')
    parser.add_argument('--loads', action=argparse.BooleanOptionalAction, default=None,
                        help='List how many times each page was loaded '
                             '(asks interactively when omitted)')
    parser.add_argument('trace_file', help='File with one page id per line')
    parser.add_argument('memory_size', help='Physical memory size, e.g. 16KB, 8MB, 1GB')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        num_frames = frames_for_memory(parse_memory_size(args.memory_size))
    except ValueError as e:
        parser.error(str(e))

    try:
        trace = read_trace(args.trace_file)
    except OSError as e:
        parser.error(f"could not read trace file '{args.trace_file}': {e.strerror}")

    print("Preprocessing reference file...", file=sys.stderr)
    position_index = build_position_index(trace)
    print("Preprocessing done.", file=sys.stderr)

    observer = None
    if args.didactic:
        if len(trace) > DIDACTIC_WARNING_THRESHOLD:
            print("WARNING: didactic mode with this many references produces "
                  "very long output!", file=sys.stderr)
        observer = print_step

    fifo_result, optimal_result = run_simulations(
        trace, num_frames, observer=observer, position_index=position_index)

    print()
    print(format_report(num_frames, len(position_index), fifo_result, optimal_result))

    show_loads = args.loads
    if show_loads is None:
        show_loads = sys.stdin.isatty() and ask_yes_no(
            "List the number of loads per page (y/n)? ")
    if show_loads:
        print()
        print(format_load_table(fifo_result, optimal_result))


if __name__ == '__main__':
    main()
