"""Seed and migrate portfolio content into the document store.

Usage::

    python -m backend.services.seed initial      # built-in achievements/projects
    python -m backend.services.seed migrate DIR  # achievements.json/projects.json
"""

import argparse
import json
import logging
import os

from backend.core.config import SEED_DIR
from backend.services.db import insert_documents

logger = logging.getLogger(__name__)

INITIAL_ACHIEVEMENTS = [
    {
        "icon": "🏆",
        "title": "Winner",
        "event": "Smart Delhi Ideathon 2025",
        "detail": "1st among 1000+ teams",
        "description": "AI-based traffic optimization system recognized by the Lt. Governor of Delhi",
        "date": "Feb 2025",
        "color": "from-yellow-400 to-orange-500",
        "iconBg": "bg-yellow-500",
        "order": 1,
    },
    {
        "icon": "🥈",
        "title": "2nd Place",
        "event": "NHAI Hackathon 2025",
        "detail": "Top 2 of 138 entries",
        "description": "AI-powered maintenance monitoring solution for national highways",
        "date": "Sept 2025",
        "color": "from-cyan-400 to-blue-500",
        "iconBg": "bg-cyan-500",
        "order": 2,
    },
    {
        "icon": "🌍",
        "title": "Fellow",
        "event": "UNESCO Climate Leadership",
        "detail": "Top 40 Global Fellows",
        "description": "Selected to lead climate innovation and sustainability initiatives",
        "date": "Apr 2025",
        "color": "from-green-400 to-emerald-500",
        "iconBg": "bg-emerald-500",
        "order": 3,
    },
    {
        "icon": "🎓",
        "title": "Delegate",
        "event": "Harvard HPAIR Conference",
        "detail": "Selected Delegate",
        "description": "Selected to attend the Harvard Project for Asian and International Relations conference",
        "date": "2025",
        "color": "from-purple-400 to-pink-500",
        "iconBg": "bg-purple-500",
        "order": 4,
    },
]

INITIAL_PROJECTS = [
    {
        "title": "Traffic Hive",
        "description": "Traffic management system that analyzes traffic patterns, optimizes routes and provides real-time updates for smart cities.",
        "category": "AI/ML",
        "technologies": ["Python", "Scikit-learn", "React", "Node.js"],
        "image": "https://images.unsplash.com/photo-1542751371-adc38448a05e?w=800&h=600&fit=crop",
        "liveUrl": "https://traffic-hive.onrender.com/",
        "githubUrl": "#",
        "featured": False,
        "badge": "WINNER - SDI 25",
        "badgeColor": "green",
        "order": 1,
    },
    {
        "title": "Police Bot",
        "description": "Chatbot for law enforcement agencies that handles routine inquiries and assists with public safety communications.",
        "category": "AI/ML",
        "technologies": ["Python", "OpenAI API", "React", "Node.js"],
        "image": "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=800&h=600&fit=crop",
        "liveUrl": "https://police-bot.vercel.app/",
        "githubUrl": "https://github.com/Vansh-Choudhary/Police-Bot",
        "featured": False,
        "badge": "TOP 10 - ACEHACK 3.0",
        "badgeColor": "yellow",
        "order": 2,
    },
    {
        "title": "Keystroke-Mouse",
        "description": "Biometric authentication from keystroke dynamics and mouse movement patterns.",
        "category": "AI/ML",
        "technologies": ["Python", "PyTorch", "JavaScript", "Express"],
        "image": "https://images.unsplash.com/photo-1639762681485-074b7f938ba0?w=800&h=600&fit=crop",
        "liveUrl": "https://keystroke-mouse-7h4m.vercel.app/",
        "githubUrl": "https://github.com/Samarth-Codes/keystroke-mouse",
        "featured": False,
        "order": 3,
    },
]


def add_initial_content(db_path: str | None = None) -> dict[str, int]:
    """Insert the built-in achievements and projects.

    Returns:
        Inserted document count per collection.
    """
    return {
        "achievements": insert_documents("achievements", INITIAL_ACHIEVEMENTS, db_path=db_path),
        "projects": insert_documents("projects", INITIAL_PROJECTS, db_path=db_path),
    }


def migrate_from_dir(seed_dir: str = SEED_DIR, db_path: str | None = None) -> dict[str, int]:
    """Import ``achievements.json`` and ``projects.json`` from ``seed_dir``.

    Missing files and non-list payloads are skipped with a log line. Imported
    documents are stamped with ``migratedAt``.

    Returns:
        Inserted document count per collection.
    """
    counts: dict[str, int] = {}
    for collection in ("achievements", "projects"):
        path = os.path.join(seed_dir, f"{collection}.json")
        if not os.path.exists(path):
            logger.info("No %s file found, skipping", collection)
            counts[collection] = 0
            continue
        with open(path, encoding="utf-8") as f:
            rows = json.load(f)
        if not isinstance(rows, list) or not rows:
            logger.info("No %s to migrate", collection)
            counts[collection] = 0
            continue
        counts[collection] = insert_documents(
            collection, rows, stamp_field="migratedAt", db_path=db_path
        )
        logger.info("Migrated %d %s", counts[collection], collection)
    return counts


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed portfolio content")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("initial")
    migrate = sub.add_parser("migrate")
    migrate.add_argument("seed_dir", nargs="?", default=SEED_DIR)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if args.command == "initial":
        counts = add_initial_content()
    else:
        counts = migrate_from_dir(args.seed_dir)
    logger.info("Seeded: %s", counts)


if __name__ == "__main__":
    main()
