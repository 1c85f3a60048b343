"""CLI interface for news input ingestion."""

import argparse
import json
import sys
from pathlib import Path

from .config import Settings
from .observability import setup_logging
from .processor import IngestionProcessor


def load_source(source: str):
    """Read ``source`` as file bytes when it names an existing file, else pass it through."""
    path = Path(source)
    try:
        if path.is_file():
            return path.read_bytes()
    except OSError:
        # Not a usable path (e.g. too long); treat it as text
        pass
    return source


def main(argv=None):
    parser = argparse.ArgumentParser(description="Extract clean article text from a URL, document or text")
    parser.add_argument("source", help="URL, path to a PDF/DOCX file, or literal text")
    parser.add_argument("--type", "-t", dest="input_type",
                        choices=["url", "pdf", "docx", "text", "auto"],
                        help="Input type hint (default: auto-detect)")
    parser.add_argument("--output", "-o", help="Output JSON file (default: stdout)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging")

    args = parser.parse_args(argv)

    settings = Settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level, settings.log_format)

    processor = IngestionProcessor(settings.fetch_config())
    result = processor.process(load_source(args.source), args.input_type)
    output = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        print(f"Wrote {result.source_type} result to {args.output}")
    else:
        print(output)

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
