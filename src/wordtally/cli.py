# src/wordtally/cli.py
import sys
import argparse

# Module imports
from wordtally.config import (
    DEFAULT_ENCODING,
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_TOP_N,
    workers_from_env,
)
from wordtally.core.aggregator import FrequencyAggregator
from wordtally.core.pipeline import FileProcessingPipeline
from wordtally.core.report import render_summary
from wordtally.errors import WordTallyError
from wordtally.logging_config import add_file_handler, get_logger


def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Count case-insensitive word frequencies in a text file and write them as 'word,count' lines."
    )
    parser.add_argument("input", type=str, nargs="?", default=DEFAULT_INPUT_PATH, help="Input text file")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Output file (default: {DEFAULT_OUTPUT_PATH})"
    )
    parser.add_argument("-w", "--workers", type=int, default=None, help="Worker threads for counting (default: all CPUs)")
    parser.add_argument("--encoding", type=str, default=DEFAULT_ENCODING, help="Text encoding (default: platform default)")
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_N, help="Number of words shown in the summary")
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    try:
        # 1. Setup
        logger = get_logger(debug=True if args.verbose else None)
        if args.log_file:
            add_file_handler(args.log_file)

        workers = args.workers if args.workers is not None else workers_from_env()
        aggregator = FrequencyAggregator(max_workers=workers, logger=logger)
        pipeline = FileProcessingPipeline(aggregator=aggregator, logger=logger, encoding=args.encoding)

        print(f"--- wordtally ---")
        print(f"Input:   {args.input}")
        print(f"Output:  {args.output}")

        # 2. Count
        table = pipeline.process_file(args.input)

        # 3. Summary
        print(f"\n--- Top {args.top} Words ---")
        print(render_summary(table.most_common(args.top), unique=len(table), total=table.total), end="")

        # 4. Output
        pipeline.write_output_file(args.output, table)
        print(f"\nSuccess! Word frequencies written to: {args.output}")
        return 0

    except KeyboardInterrupt:
        print("\nCancelled.")
        return 1

    except (WordTallyError, ValueError) as e:
        print(f"An error occurred: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
