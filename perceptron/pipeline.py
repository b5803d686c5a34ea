import argparse
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from perceptron.cost import compute_cost
from perceptron.datasets import DATASETS, input_arity, load_dataset
from perceptron.gradient import EPSILON, METHODS
from perceptron.nn import Neuron
from perceptron.rng import RandomSource
from perceptron.training import ITERATIONS, LEARNING_RATE, UPDATES, train

REPORT_DIR = os.getenv("PERCEPTRON_REPORT_DIR")


def describe(model, cost, title):
    print(f"*** {title} ***")
    print(f"Cost     : {cost}")
    for i, w in enumerate(model.weights, start=1):
        print(f"Weight {i} : {w}")
    print(f"Bias     : {model.bias}")


def predictions(model, samples):
    return [(x, y, model(x)) for x, y in samples]


def export_report(report_dir, dataset, args, report, rows):
    report_dir = Path(report_dir)
    report_dir.mkdir(parents=True, exist_ok=True)

    history_csv = ["iteration,cost"] + [f"{it},{cost:.8f}" for it, cost in report.history]
    (report_dir / "cost_history.csv").write_text("\n".join(history_csv))

    report_lines = [
        "# Training Summary",
        "",
        f"Run timestamp (UTC): {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        "## Setup",
        f"- Dataset: {dataset} ({len(rows)} samples)",
        f"- Iterations: {args.iterations}",
        f"- Learning rate: {args.learning_rate}",
        f"- Epsilon: {args.epsilon}",
        f"- Difference method: {args.method}",
        f"- Update order: {args.update}",
        f"- Seed: {args.seed}",
        "",
        "## Cost",
        f"- Before training: {report.initial_cost:.6f}",
        f"- After training: {report.final_cost:.6f}",
        "",
        "## Predictions",
    ]
    for x, y, out in rows:
        report_lines.append(f"- {x} -> {out:.4f} (expected {y})")
    (report_dir / "summary.md").write_text("\n".join(report_lines))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Train a single neuron by finite-difference gradient descent."
    )
    parser.add_argument(
        "--dataset",
        choices=sorted(DATASETS),
        default="linear",
        help="Training set to fit (default: linear)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=ITERATIONS,
        help=f"Number of training iterations (default: {ITERATIONS})",
    )
    parser.add_argument(
        "--learning-rate",
        type=float,
        default=LEARNING_RATE,
        help=f"Learning rate for gradient descent (default: {LEARNING_RATE})",
    )
    parser.add_argument(
        "--epsilon",
        type=float,
        default=EPSILON,
        help=f"Finite-difference step (default: {EPSILON})",
    )
    parser.add_argument(
        "--method",
        choices=METHODS,
        default="forward",
        help="Finite-difference scheme (default: forward)",
    )
    parser.add_argument(
        "--update",
        choices=UPDATES,
        default="snapshot",
        help="Parameter update order within an iteration (default: snapshot)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for weight initialization (default: unseeded)",
    )
    parser.add_argument(
        "--report-dir",
        default=REPORT_DIR,
        help="Directory to write summary.md and cost_history.csv into",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress training progress output",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    samples, activation = load_dataset(args.dataset)
    model = Neuron(input_arity(samples), activation, rng=RandomSource(args.seed))
    describe(model, compute_cost(model, samples), "Before training")

    report = train(
        model,
        samples,
        learning_rate=args.learning_rate,
        iterations=args.iterations,
        epsilon=args.epsilon,
        method=args.method,
        update=args.update,
    )

    rows = predictions(model, samples)
    describe(model, report.final_cost, "After training")

    print("*** Tests ***")
    for x, _, out in rows:
        print(f"Input {' '.join(str(v) for v in x)} - Output {out}")

    if args.report_dir:
        export_report(args.report_dir, args.dataset, args, report, rows)
        print(f"\nReport exported to {args.report_dir}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
