#!/usr/bin/env python3

import sys
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all categories in the database."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}  Name: {category.name}")

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category, prompting for the name if not given."""
    name = args.name
    if name is None:
        name = input("Category name (e.g., Work): ")
    name = name.strip()

    if not name:
        logger.error("Category name cannot be empty.")
        sys.exit(1)

    existing = services.categories.find_by_name(name)
    if existing:
        logger.error(f"Category '{name}' already exists (ID: {existing.id}).")
        sys.exit(1)

    category = services.categories.create(name)
    logger.info(f"✓ Category created successfully with ID: {category.id}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="List and create task categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument(
        "name",
        nargs="?",
        help="Category name (prompted for if omitted)",
    )
    create_parser.set_defaults(func=cmd_create)
