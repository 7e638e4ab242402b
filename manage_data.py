"""Seed or remove sample data in MongoDB.

    python manage_data.py seed all
    python manage_data.py seed tokens
    python manage_data.py remove claims
"""
import argparse
import sys

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

load_dotenv()

from app.core.exceptions import SafeGuardException
from app.database.mongo_client import MongoDBClient
from app.services.seed import SEEDS, SEED_DATA_NAMES, seed_collection, remove_collection, run_for


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Manage SafeGuard sample data")
    parser.add_argument("action", choices=["seed", "remove"])
    parser.add_argument(
        "target",
        choices=["all"] + sorted(SEEDS),
        help="'all' covers insurance options, policies and claims for remove, and every collection for seed"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.target != "all":
        names = [args.target]
    elif args.action == "seed":
        names = ["insurance-options", "policies", "claims", "tokens"]
    else:
        names = SEED_DATA_NAMES

    client = MongoDBClient()
    if not client.ping():
        print("Error: cannot reach MongoDB. Check MONGODB_URI.")
        return 1

    action = seed_collection if args.action == "seed" else remove_collection
    try:
        results = run_for(names, action, client.db)
    except (SafeGuardException, PyMongoError) as e:
        print(f"Failed to {args.action} data: {e}")
        return 1
    finally:
        client.close()

    for name, count in results.items():
        verb = "seeded" if args.action == "seed" else "removed"
        print(f"{name}: {count} {verb}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
