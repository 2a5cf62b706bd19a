#!/usr/bin/env python3
"""
Seed the default bakery categories into a fresh Supabase project.

Usage:
    python scripts/seed_categories.py            # create missing categories
    python scripts/seed_categories.py --dry-run  # only list what would be created
"""

import argparse
import logging
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import get_settings
from app.revalidation import NullViewInvalidator
from core.models import CategoryInput
from core.services import CategoryService
from lib.supabase_client import create_supabase_client

DEFAULT_CATEGORIES = [
    ("Kue Kering", "Nastar, kastengel, putri salju dan kue toples lainnya"),
    ("Kue Basah", "Klepon, lapis, dadar gulung dan jajanan pasar"),
    ("Nasi Kotak", "Paket nasi untuk acara dan syukuran"),
    ("Snack Box", "Paket snack untuk rapat dan arisan"),
    ("Tumpeng", "Tumpeng nasi kuning untuk perayaan"),
]


def main():
    parser = argparse.ArgumentParser(description="Seed default categories")
    parser.add_argument("--dry-run", action="store_true", help="Don't write anything")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    settings = get_settings()
    client = create_supabase_client(settings)
    service = CategoryService(client, NullViewInvalidator())

    existing = {category.slug for category in service.list_categories()}

    for name, description in DEFAULT_CATEGORIES:
        data = CategoryInput(name=name, description=description)
        if data.slug in existing:
            print(f"  skip    {data.slug}")
            continue
        if args.dry_run:
            print(f"  would create {data.slug}")
            continue
        category = service.create_category(data)
        print(f"  created {category.slug} (order {category.display_order})")


if __name__ == "__main__":
    main()
