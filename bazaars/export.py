# bazaars/export.py
"""Dump ads as JSON lines, one ad per line.

Rows are streamed from the database in batches so large tables never have
to fit in memory::

    bazaars-export --status active --batch-size 500 > ads.jsonl
"""
import sys
import argparse
from . import crud, schemas
from .db import SessionLocal
from .utils import logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="bazaars-export", description=__doc__.splitlines()[0])
    parser.add_argument("--status", help="only export ads with this status")
    parser.add_argument("--top-ad", dest="top_ad", action="store_true", default=None,
                        help="only export promoted ads")
    parser.add_argument("--no-top-ad", dest="top_ad", action="store_false", default=None,
                        help="only export ads that are not promoted")
    parser.add_argument("--batch-size", type=int, default=100)
    return parser.parse_args(argv)


def export_ads(out, status=None, top_ad=None, batch_size=100):
    filters = schemas.AdFilter(status=status, top_ad=top_ad).model_dump(exclude_none=True)
    count = 0
    db = SessionLocal()
    try:
        for ad in crud.iter_ads(db, filters=filters, batch_size=batch_size):
            out.write(schemas.AdOut.model_validate(ad).model_dump_json())
            out.write("\n")
            count += 1
    finally:
        db.close()
    logger.info("Exported %d ad(s)", count)
    return count


def main(argv=None):
    args = parse_args(argv)
    export_ads(sys.stdout, status=args.status, top_ad=args.top_ad, batch_size=args.batch_size)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
