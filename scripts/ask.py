"""Ask one tourism question from the command line and print the JSON result."""
import argparse
import asyncio
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from graph.orchestrator import run_query


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("query", help="e.g. \"I'm going to Paris, what's the weather?\"")
    parser.add_argument("--api-key", default=os.getenv("OPENAI_API_KEY"), help="Optional LLM key")
    args = parser.parse_args()

    result = asyncio.run(run_query(args.query, args.api_key))
    print(result.model_dump_json(indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
