from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from ptable_svg.data.loader import validate_elements
from ptable_svg.data.sources import load_periodic_table_cli


def build_dataset(out_path: Path) -> int:
    records = load_periodic_table_cli()
    validate_elements(records)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    lines = ",\n".join(f"    {json.dumps(record, ensure_ascii=False)}" for record in records)
    out_path.write_text('{\n  "elements": [\n' + lines + "\n  ]\n}\n", encoding="utf-8")
    return len(records)


def main() -> None:
    parser = argparse.ArgumentParser(description="Build an elements.json dataset from periodic_table_cli data.")
    parser.add_argument("--out", type=Path, default=Path("src/ptable_svg/data/elements.json"))
    args = parser.parse_args()
    count = build_dataset(args.out)
    print(f"Wrote {count} elements to {args.out}")


if __name__ == "__main__":
    main()
