import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'mazing' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazing.algo.base import Args
from mazing.algo.catalog import CARVERS, make_task
from mazing.algo.distance import DistanceScan
from mazing.algo.executor import Executor
from mazing.core.distance import DistanceMap
from mazing.core.maze import Maze


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="mazing: step-by-step perfect maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every step")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=20, help="Maze width (columns)")
    gen_parser.add_argument("--height", type=int, default=15, help="Maze height (lines)")
    gen_parser.add_argument("--algo", type=str, default="wilson", choices=sorted(CARVERS), help="Carving algorithm")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    gen_parser.add_argument("--distance", action="store_true", help="Queue a distance scan after carving")
    gen_parser.add_argument("--from-center", action="store_true", help="Start the distance scan at the center cell")
    gen_parser.add_argument("--symbols", type=str, default="light", choices=["light", "dashed", "none"], help="ASCII symbol set")
    gen_parser.add_argument("--visual", action="store_true", help="Show the carving in a window")
    gen_parser.add_argument("--record", action="store_true", help="Record the window to an mp4 file")
    gen_parser.add_argument("--steps-per-frame", type=int, default=50, help="Ticks per frame (or per lock in background mode)")
    gen_parser.add_argument("--background", action="store_true", help="Carve on a worker thread")

    bench_parser = subparsers.add_parser("benchmark", help="Time every algorithm")
    bench_parser.add_argument("--size", type=int, default=40, help="Benchmark size")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random seed")

    return parser


def generate(args, logger: logging.Logger) -> int:
    logger.info(f"Generating {args.width}x{args.height} maze with {args.algo}...")

    maze = Maze(args.width, args.height)
    distance_map = DistanceMap(args.width, args.height) if args.distance else None
    bundle = Args(maze, distance_map)

    executor = Executor()
    executor.stack(make_task(args.algo, maze, seed=args.seed))
    if args.distance:
        start = maze.grid.center() if args.from_center else None
        executor.stack(DistanceScan(maze, start=start))

    runner = None
    if args.background:
        from mazing.algo.worker import BackgroundRunner
        runner = BackgroundRunner(executor, bundle, batch=args.steps_per_frame)

    if args.visual or args.record:
        logger.info("Visual mode enabled - Opening window...")
        from mazing.viz.renderer import Renderer
        renderer = Renderer(executor, bundle, steps_per_frame=args.steps_per_frame,
                            runner=runner, record=args.record)
        if args.record:
            os.makedirs("recordings", exist_ok=True)
            renderer.recorder.output_file = renderer.recorder.default_path(
                f"gen_{args.algo}_{args.width}x{args.height}")
            logger.info(f"Recording video to {renderer.recorder.output_file}")
        renderer.init_window()
        status = renderer.run_loop()
    elif runner is not None:
        logger.info("Background generation...")
        runner.start()
        status = runner.join()
    else:
        logger.info("Headless generation...")
        status = executor.run(bundle)

    if status is not None and status.is_aborted:
        logger.error(f"Generation aborted: {status.reason}")
        return 1

    logger.info(f"Carved {maze.edge_count()} gates over {maze.grid.cell_count} cells")
    if distance_map is not None:
        logger.info(f"Highest depth: {distance_map.highest}")

    if args.symbols != "none":
        from mazing.viz.ascii import AsciiRenderer, SymbolSet
        drawer = AsciiRenderer(SymbolSet(args.symbols))
        print("\n".join(drawer.draw(maze, distance_map)))
    return 0


def benchmark(args, logger: logging.Logger) -> int:
    logger.info(f"Running benchmark suite (Size: {args.size}x{args.size})...")

    print(f"\n{'ALGORITHM':<15} | {'TIME (s)':<10} | {'TICKS':<10} | {'HIGHEST':<10}")
    print("-" * 55)

    failures = 0
    for name in sorted(CARVERS):
        maze = Maze(args.size, args.size)
        bundle = Args(maze, DistanceMap(args.size, args.size))
        executor = Executor()
        task = make_task(name, maze, seed=args.seed)
        executor.stack(task)
        executor.stack(DistanceScan(maze))

        t_start = time.time()
        status = executor.run(bundle)
        duration = time.time() - t_start

        if status.is_aborted:
            failures += 1
            print(f"{name:<15} | aborted: {status.reason}")
            continue
        print(f"{name:<15} | {duration:<10.4f} | {task.step_count:<10} | {bundle.distance_map.highest:<10}")

    return 1 if failures else 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate" and (args.width < 1 or args.height < 1):
        parser.error("--width and --height must be at least 1")
    if args.command == "benchmark" and args.size < 1:
        parser.error("--size must be at least 1")

    setup_logging(args.verbose)
    logger = logging.getLogger("mazing")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        return generate(args, logger)
    elif args.command == "benchmark":
        return benchmark(args, logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
