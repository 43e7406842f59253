import json
import sys
from pathlib import Path

from pydantic import ValidationError

from astrocore.errors import AstroCoreError
from astrocore.logging_setup import configure_logging
from astrocore.schemas import ChartInput, to_response
from astrocore.services.chart import compute_chart


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print("Usage: python cli.py input.json output.json", file=sys.stderr)
        return 1

    try:
        logger = configure_logging()
    except AstroCoreError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 2

    in_path = Path(args[0])
    out_path = Path(args[1])
    try:
        data = ChartInput.model_validate(json.loads(in_path.read_text(encoding="utf-8")))
        chart = compute_chart(data.to_request(), ayanamsha=data.options.ayanamsha)
    except (ValidationError, json.JSONDecodeError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Cannot read {in_path}: {exc}", file=sys.stderr)
        return 2
    except AstroCoreError as exc:
        logger.warning("chart_failed", extra={"error": type(exc).__name__})
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 2

    out_path.write_text(to_response(chart).model_dump_json(indent=2), encoding="utf-8")
    print(f"Wrote chart JSON → {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
