"""Seed the configured database with a handful of demo discussions.

Usage:
    python -m safepath_community.scripts.seed [--reset]
"""
from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.orm import Session

from safepath_community.db.session import SessionLocal, create_tables, drop_tables
from safepath_community.db.time import utcnow
from safepath_community.models import Discussion

SAMPLE_DISCUSSIONS: list[dict[str, object]] = [
    {
        "title": "Community guidelines: read before posting",
        "content": "Be kind, share verified information, and never post personal details.",
        "category_id": "general",
        "tags": ["guidelines"],
        "is_pinned": True,
    },
    {
        "title": "Flash flood warnings near the river walk",
        "content": "Water rose quickly after last night's storm. Avoid the underpass.",
        "category_id": "incidents",
        "tags": ["flood", "weather"],
        "upvotes": 12,
        "reply_count": 4,
    },
    {
        "title": "Well-lit route from the station to campus",
        "content": "Main street stays busy until midnight; the park path does not.",
        "category_id": "routes",
        "tags": ["night", "walking"],
        "upvotes": 7,
        "downvotes": 1,
        "reply_count": 2,
    },
    {
        "title": "What goes in a flood go-bag?",
        "content": "Documents in a dry bag, torch, power bank, water, and medication.",
        "category_id": "emergency",
        "tags": ["flood", "checklist"],
        "upvotes": 5,
        "reply_count": 6,
    },
    {
        "title": "Share your location with a friend",
        "content": "Most phones can share live location for a set time; use it on late trips.",
        "category_id": "safety",
        "tags": ["tips"],
        "upvotes": 3,
    },
]


def seed_discussions(db: Session) -> int:
    """Insert the sample discussions, spacing their timestamps an hour apart."""
    now = utcnow()
    for offset, sample in enumerate(reversed(SAMPLE_DISCUSSIONS)):
        created = now - timedelta(hours=offset + 1)
        db.add(Discussion(created_at=created, updated_at=created, **sample))
    db.commit()
    return len(SAMPLE_DISCUSSIONS)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()

    if args.reset:
        drop_tables()
    create_tables()

    db = SessionLocal()
    try:
        count = seed_discussions(db)
    finally:
        db.close()
    print(f"Seeded {count} discussions.")


if __name__ == "__main__":
    main()
