from __future__ import annotations

import argparse
import logging
import sys

from pipeline.graph import pipeline

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

DEFAULT_IMAGE_URL = "https://example.com/sample-image.jpg"
DEFAULT_QUERY = "What can you tell me about this image?"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze an image and ask ORA about it.")
    parser.add_argument("--image-url", default=DEFAULT_IMAGE_URL)
    parser.add_argument("--query", default=DEFAULT_QUERY)
    parser.add_argument(
        "--feature",
        dest="features",
        action="append",
        help="Google Vision feature name; repeat for several (default: labels, text, objects)",
    )
    parser.add_argument(
        "--graph",
        action="store_true",
        help="print the pipeline as Mermaid source and exit",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Run one image + question through the pipeline, printing each node's
    state delta and then the ORA answer.
    """
    args = parse_args(argv)

    if args.graph:
        print(pipeline.get_graph().draw_mermaid())
        return 0

    initial_state = {
        "image_url": args.image_url,
        "query": args.query,
        "features": args.features,
        "analysis": None,
        "ora_response": None,
        "final": None,
        "error": None,
    }

    final = None
    error = None
    # Stream: see each node's state delta live
    for step in pipeline.stream(initial_state):
        node = list(step.keys())[0]
        delta = step[node] or {}
        print("\n" + "=" * 40)
        print(f"NODE: {node}")
        print(f"DELTA: {delta}")
        error = delta.get("error", error)
        final = delta.get("final", final)

    if not final:
        print(f"\nFailed to analyze image: {error}", file=sys.stderr)
        return 1

    answer = final["oraResponse"]
    print("\n=== Results ===\n")
    print(f"User query: {args.query}")
    print("\nORA response:")
    if isinstance(answer, dict):
        answer = answer.get("completion") or answer.get("message")
    print(answer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
