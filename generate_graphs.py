import argparse

import matplotlib.pyplot as plt

from page_table import build_position_index
from reference_trace import read_trace
from simulator import ALGORITHM_NAMES, run_simulations


def fault_curve(trace, frame_counts):
    """Page faults of each algorithm for every frame count in `frame_counts`."""
    trace = tuple(trace)
    position_index = build_position_index(trace)
    curve = {'FIFO': [], 'OPT': []}
    for num_frames in frame_counts:
        fifo_result, optimal_result = run_simulations(
            trace, num_frames, position_index=position_index)
        curve['FIFO'].append(fifo_result.page_faults)
        curve['OPT'].append(optimal_result.page_faults)
    return curve


def plot_fault_curve(curve, frame_counts, output, title='Page Faults vs Number of Frames'):
    frame_counts = list(frame_counts)
    fig, ax = plt.subplots(figsize=(8, 5))

    for algorithm, marker in (('FIFO', 'o'), ('OPT', 'x')):
        ax.plot(frame_counts, curve[algorithm], label=ALGORITHM_NAMES[algorithm], marker=marker)

    ax.set_xlabel('Number of Frames')
    ax.set_ylabel('Page Faults')
    ax.set_title(title, fontweight='bold')
    ax.grid(alpha=0.3)
    ax.legend()

    fig.tight_layout()
    fig.savefig(output, dpi=300, bbox_inches='tight')
    plt.close(fig)
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot page faults against frame count')
    parser.add_argument('trace_file', help='File with one page id per line')
    parser.add_argument('--max-frames', type=int, default=10)
    parser.add_argument('--output', default='fault_curve.png')
    args = parser.parse_args(argv)

    if args.max_frames < 1:
        parser.error("--max-frames must be at least 1")

    try:
        trace = read_trace(args.trace_file)
    except OSError as e:
        parser.error(f"could not read trace file '{args.trace_file}': {e.strerror}")

    frame_counts = range(1, args.max_frames + 1)

    print("Running simulations...")
    curve = fault_curve(trace, frame_counts)

    print(f"{'Frames':<10} {'FIFO':<10} {'Optimal':<10}")
    print("-" * 30)
    for num_frames, fifo, opt in zip(frame_counts, curve['FIFO'], curve['OPT']):
        print(f"{num_frames:<10} {fifo:<10} {opt:<10}")

    plot_fault_curve(curve, frame_counts, args.output)
    print(f"\nGraph saved as '{args.output}'")


if __name__ == '__main__':
    main()
