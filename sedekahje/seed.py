"""Replace the stored institutions with those from a JSON data file."""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

from .db import connect_db, disconnect_db
from .models import Institution
from .services import COLLECTION_NAME, DATABASE_NAME
from .slug import slugify

logger = logging.getLogger(__name__)


def load_institutions(path) -> list[Institution]:
    """Read a JSON array of institutions; ``null`` gives an empty list."""
    data = json.loads(Path(path).read_bytes())
    if data is not None and not isinstance(data, list):
        raise ValueError("institution data must be a JSON array")
    return [Institution.from_dict(item) for item in data or []]


def seed_institutions(collection, institutions) -> list[Institution]:
    """Clear the collection, then insert each institution with a slug made from its name."""
    collection.delete_many({})
    seeded = []
    for institution in institutions:
        record = replace(institution, slug=slugify(institution.name))
        collection.insert_one(record.to_dict())
        logger.info("Inserted institution: %s", record.name)
        seeded.append(record)
    logger.info("Done")
    return seeded


def main(argv=None) -> int:
    """Seed the database from a data file; returns the exit status."""
    parser = argparse.ArgumentParser(prog="sedekahje-seed", description=__doc__)
    parser.add_argument("data_file", nargs="?", default="data/sedekahjeData.json")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    if not load_dotenv(".env"):
        logger.warning(".env does not exist")
    mongo_uri = os.environ.get("MONGO_URI", "")
    if not mongo_uri:
        logger.warning("MONGO_URI is not set")

    try:
        institutions = load_institutions(args.data_file)
        client = connect_db(mongo_uri)
    except (OSError, ValueError, PyMongoError) as exc:
        logger.error("Error: %s", exc)
        return 1

    try:
        seed_institutions(client[DATABASE_NAME][COLLECTION_NAME], institutions)
    except PyMongoError as exc:
        logger.error("Error seeding institutions: %s", exc)
        return 1
    finally:
        disconnect_db(client)
    return 0