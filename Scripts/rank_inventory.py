# Scripts/rank_inventory.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from Swatch_engine.color.model import parse_hex
from Swatch_engine.color.schema import HarmonyFamily, MatchMode
from Swatch_engine.io.inventory import records_from_frame, reference_dots
from Swatch_engine.palette.harmony import harmony_targets
from Swatch_engine.reco.rank import rank_frame

logger = logging.getLogger("rank_inventory")


def main() -> int:
    p = argparse.ArgumentParser(description="Rank an inventory CSV (id,color_hex[,owned,name]) by color distance.")
    p.add_argument("--inventory", type=str, required=True, help="CSV with at least id,color_hex columns")
    p.add_argument("--target", type=str, required=True, help="target color, e.g. '#C0392B'")
    p.add_argument("--mode", type=str, default=MatchMode.SIMILAR.value, choices=[m.value for m in MatchMode])
    p.add_argument("--harmony", type=str, default=None, choices=[f.value for f in HarmonyFamily])
    p.add_argument("--name-col", type=str, default=None)
    p.add_argument("--topk", type=int, default=20)
    p.add_argument("--out", type=str, default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    target = parse_hex(args.target)
    df = pd.read_csv(args.inventory)
    logger.info("loaded %d inventory rows from %s", len(df), args.inventory)

    ranked = rank_frame(target, df, args.mode, name_col=args.name_col, topk=args.topk)
    cols = [c for c in ["rank", "id", args.name_col, "color_hex", "match_pct", "distance"] if c and c in ranked.columns]
    print(ranked[cols].to_string(index=False))

    if args.harmony:
        records = records_from_frame(df)
        dots, ids = reference_dots(records, owned_only="owned" in df.columns)
        print(f"\n[{args.harmony}] palette for {target}:")
        for tg in harmony_targets(target, args.harmony, dots):
            match = ids[tg.matched_reference_index] if tg.matched_reference_index is not None else "-"
            print(f"  {tg.color}  h={tg.hsl.h:6.1f}  closest={match}")

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        ranked.to_csv(out_path, index=False)
        logger.info("wrote %s", out_path.as_posix())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
