"""
Recompute the cached per-user scores of published Grands Prix.

Runs after a result is published (or to rebuild the gp_scores table), using
the same scoring module as the API.

    python -m scripts.score_published_result --gp-id 12
    python -m scripts.score_published_result --all
"""
import argparse
import sys

from boxbox.db.session import SessionLocal
from boxbox.services import repository as repo
from boxbox.services.results import store_gp_scores


def score_gps(gp_ids):
    written = 0
    missing = []
    with SessionLocal() as db:
        for gp_id in gp_ids:
            gp = repo.get_grand_prix(db, gp_id)
            result = repo.get_official_result(db, gp_id)
            if gp is None or result is None:
                missing.append(gp_id)
                print(f"Skipping GP {gp_id} - no schedule entry or official result.")
                continue
            n = store_gp_scores(db, gp, result)
            written += n
            print(f"Scored GP {gp_id} ({gp.name}): {n} predictions")
        db.commit()
    return written, missing


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--gp-id", type=int, help="Grand Prix id to score")
    group.add_argument("--all", action="store_true", help="Score every published Grand Prix")
    args = ap.parse_args()

    if args.all:
        with SessionLocal() as db:
            ids = [r.gp_id for r in repo.list_official_results(db)]
    else:
        ids = [args.gp_id]

    total, missing = score_gps(ids)
    print(f"Done. {total} scores written.")
    if missing:
        sys.exit(1)
