"""
CLI main entry point.
"""

import argparse
import logging
import sqlite3
import sys
from pathlib import Path

from ..config import Config, ConfigValidationError, create_default_config, load_config
from ..media import MediaError, photo_to_data_url, save_item_qr
from ..schemas import Category, Item, category_label, effective_category
from ..services import (
    ALL_CATEGORIES,
    DEFAULT_EXPORT_FILENAME,
    LifecycleService,
    QueryService,
    TransferService,
)
from ..state_store import StateStore

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="ifound",
        description="Register, report, verify and reclaim lost items",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("init-config", help="Write a default config file")

    # register command
    register_parser = subparsers.add_parser("register", help="Register an item you own")
    register_parser.add_argument("--name", required=True, help="Item name")
    register_parser.add_argument("--student-id", required=True, help="Owner's student ID")
    register_parser.add_argument("--owner", required=True, help="Owner's full name")
    register_parser.add_argument(
        "--category",
        required=True,
        choices=[c.value for c in Category],
        help="Item category",
    )
    register_parser.add_argument("--strand", default="", help="Owner's strand")
    register_parser.add_argument("--email", default="", help="Owner's email")
    register_parser.add_argument("--contact", default="", help="Owner's contact number")
    register_parser.add_argument("--photo", type=Path, help="Photo of the item")

    # my-items command
    my_items_parser = subparsers.add_parser("my-items", help="List items registered to a student")
    my_items_parser.add_argument("student_id", help="Student ID")

    # show command
    show_parser = subparsers.add_parser("show", help="Show one item (e.g. a scanned code)")
    show_parser.add_argument("item_id", help="Item ID")

    # qr command
    qr_parser = subparsers.add_parser("qr", help="Write the QR code of an item")
    qr_parser.add_argument("item_id", help="Item ID")
    qr_parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for the PNG (default: qr.output_dir from config)",
    )

    # report command
    report_parser = subparsers.add_parser("report", help="Report a found item by its code")
    report_parser.add_argument("item_id", help="Item ID decoded from the QR code")
    report_parser.add_argument("--finder", required=True, help="Finder's name")
    report_parser.add_argument("--location", required=True, help="Where the item was found")
    report_parser.add_argument("--photo", type=Path, help="Photo of the found item")

    subparsers.add_parser("pending", help="List found reports awaiting verification")

    # verify command
    verify_parser = subparsers.add_parser(
        "verify", help="Verify a found report and move its item to Lost Items"
    )
    verify_parser.add_argument("report_id", type=int, help="Found report ID")

    # lost command
    lost_parser = subparsers.add_parser("lost", help="List Lost Items")
    lost_parser.add_argument("--search", default="", help="Filter by item or owner name")
    lost_parser.add_argument(
        "--category",
        default=ALL_CATEGORIES,
        choices=[ALL_CATEGORIES] + [c.value for c in Category],
        help="Filter by category (default: all)",
    )

    # claim command
    claim_parser = subparsers.add_parser("claim", help="Reclaim an item as its owner")
    claim_parser.add_argument("item_id", help="Item ID")
    claim_parser.add_argument("--student-id", required=True, help="Owner's student ID")

    subparsers.add_parser("claims", help="List submitted claims")
    subparsers.add_parser("status", help="Show analytics")

    # export command
    export_parser = subparsers.add_parser("export", help="Export all data to a JSON file")
    export_parser.add_argument(
        "--output",
        type=Path,
        default=Path(DEFAULT_EXPORT_FILENAME),
        help=f"Output file (default: {DEFAULT_EXPORT_FILENAME})",
    )

    # import command
    import_parser = subparsers.add_parser("import", help="Merge a JSON export into the store")
    import_parser.add_argument("file", type=Path, help="Export file to merge")

    return parser


def _open_store(config: Config) -> StateStore:
    return StateStore(config.store_path, record_key=config.record_key)


def _read_photo(config: Config, path: Path | None) -> str | None:
    if path is None:
        return None
    return photo_to_data_url(
        path.read_bytes(),
        max_width=config.photos.max_width,
        quality=config.photos.quality,
    )


def _print_item(item: Item) -> None:
    category = category_label(effective_category(item.category, item.item_name))
    print(f"  📦 {item.item_name or ''} [{item.status.value}]")
    print(f"     → ID: {item.id}")
    print(f"     → Owner: {item.owner_name or ''} ({item.contact or 'n/a'})")
    print(f"     → Category: {category}")
    if item.last_claimed_at:
        print(f"     → Last claimed: {item.last_claimed_at}")


def cmd_init_config(config_path: Path) -> int:
    """Write the default config file."""
    if config_path.exists():
        print(f"❌ {config_path} already exists")
        return 1
    create_default_config(config_path)
    print(f"✓ Wrote {config_path}")
    return 0


def cmd_register(config: Config, args: argparse.Namespace) -> int:
    """Register an item."""
    store = _open_store(config)
    queries = QueryService(store)
    student_id = args.student_id.strip()
    item_name = args.name.strip()

    if queries.item_name_taken(student_id, item_name):
        print("❌ You already registered an item with this name. Please use a different name.")
        return 1

    photo = _read_photo(config, args.photo)
    item = LifecycleService(store).add_item(
        item_name=item_name,
        student_id=student_id,
        owner_name=args.owner.strip(),
        category=args.category,
        strand=args.strand.strip(),
        email=args.email.strip(),
        contact=args.contact.strip(),
        photo_data_url=photo,
    )
    print(f"✓ Registered '{item.item_name}'")
    print(f"  Item ID: {item.id}")
    print(f"  Run 'ifound qr {item.id}' to save its QR code.")
    return 0


def cmd_my_items(config: Config, student_id: str) -> int:
    """List a student's items."""
    items = QueryService(_open_store(config)).list_items_by_student(student_id.strip())
    if not items:
        print("No items found.")
        return 0
    for item in items:
        _print_item(item)
    print(f"\n✓ {len(items)} item(s)")
    return 0


def cmd_show(config: Config, item_id: str) -> int:
    """Show one item."""
    item = QueryService(_open_store(config)).get_item(item_id.strip())
    if item is None:
        print("❌ Item not found")
        return 1
    _print_item(item)
    return 0


def cmd_qr(config: Config, item_id: str, output_dir: Path | None) -> int:
    """Write an item's QR code."""
    item = QueryService(_open_store(config)).get_item(item_id.strip())
    if item is None:
        print("❌ Item not found")
        return 1
    path = save_item_qr(
        item.id,
        output_dir or config.qr.output_dir,
        box_size=config.qr.box_size,
        border=config.qr.border,
    )
    print(f"✓ QR code saved to {path}")
    return 0


def cmd_report(config: Config, args: argparse.Namespace) -> int:
    """File a found report."""
    photo = _read_photo(config, args.photo)
    report = LifecycleService(_open_store(config)).add_found_report(
        item_id=args.item_id.strip(),
        finder_name=args.finder.strip(),
        location=args.location.strip(),
        photo_data_url=photo,
    )
    print(f"✓ Report #{report.id} submitted. Thank you!")
    return 0


def cmd_pending(config: Config) -> int:
    """List pending reports."""
    reports = QueryService(_open_store(config)).list_pending_reports_with_item()
    if not reports:
        print("No pending reports.")
        return 0
    for view in reports:
        print(f"  📝 #{view.report.id} {view.item_name}")
        print(f"     → Finder: {view.report.finder_name or ''}")
        print(f"     → Location: {view.report.location or ''}")
        print(f"     → Finder photo: {'yes' if view.report.photo_path else 'no'}")
    print(f"\n✓ {len(reports)} pending report(s)")
    return 0


def cmd_verify(config: Config, report_id: int) -> int:
    """Verify a report."""
    if LifecycleService(_open_store(config)).verify_report_move_to_lost(report_id):
        print("✓ Verified and moved to Lost Items.")
        return 0
    print("❌ Failed to verify.")
    return 1


def cmd_lost(config: Config, search: str, category: str) -> int:
    """Show the lost listing."""
    items = QueryService(_open_store(config)).search_lost_items(search, category)
    if not items:
        print("No lost items.")
        return 0
    for item in items:
        _print_item(item)
    print(f"\n✓ {len(items)} lost item(s)")
    return 0


def cmd_claim(config: Config, item_id: str, student_id: str) -> int:
    """Reclaim an item."""
    store = _open_store(config)
    item_id = item_id.strip()
    if QueryService(store).get_item(item_id) is None:
        print("❌ Failed to claim: item not found")
        return 1
    claim = LifecycleService(store).claim_as_owner(item_id, student_id)
    if claim is None:
        print("❌ Student ID does not match the registered owner. Cannot claim.")
        return 1
    print(f"✓ Claim #{claim.id} submitted.")
    return 0


def cmd_claims(config: Config) -> int:
    """List claims."""
    claims = QueryService(_open_store(config)).list_claims_with_item()
    if not claims:
        print("No claims yet.")
        return 0
    for view in claims:
        print(f"  ✅ Claim: {view.item_name}")
        print(f"     → Claimant: {view.claim.claimant_name or ''}")
        print(f"     → Student ID: {view.student_id}")
        print(f"     → On: {view.claim.created_at or ''}")
    return 0


def cmd_status(config: Config) -> int:
    """Show analytics."""
    stats = QueryService(_open_store(config)).analytics()

    print("\n📊 Lost & Found Status")
    print("=" * 40)
    print(f"  Total items:      {stats.total}")
    print(f"  Lost:             {stats.lost}")
    print(f"  Claimed:          {stats.claimed}")
    print(f"  Pending reports:  {stats.pending_reports}")
    print(f"  Recovery rate:    {stats.recovery_rate}%")
    print()

    return 0


def cmd_export(config: Config, output: Path) -> int:
    """Export the store."""
    path = TransferService(_open_store(config)).export_to_file(output)
    print(f"✓ Exported to {path}")
    return 0


def cmd_import(config: Config, path: Path) -> int:
    """Merge an export file."""
    if not path.exists():
        print(f"❌ {path} does not exist")
        return 1
    if TransferService(_open_store(config)).import_from_file(path):
        print("✓ Import complete")
        return 0
    print("❌ Import failed")
    return 1


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init-config":
        return cmd_init_config(parsed.config)

    # Load config
    try:
        config = load_config(parsed.config)
        errors = config.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))
    except Exception as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    # Route to command
    try:
        if parsed.command == "register":
            return cmd_register(config, parsed)
        elif parsed.command == "my-items":
            return cmd_my_items(config, parsed.student_id)
        elif parsed.command == "show":
            return cmd_show(config, parsed.item_id)
        elif parsed.command == "qr":
            return cmd_qr(config, parsed.item_id, parsed.output_dir)
        elif parsed.command == "report":
            return cmd_report(config, parsed)
        elif parsed.command == "pending":
            return cmd_pending(config)
        elif parsed.command == "verify":
            return cmd_verify(config, parsed.report_id)
        elif parsed.command == "lost":
            return cmd_lost(config, parsed.search, parsed.category)
        elif parsed.command == "claim":
            return cmd_claim(config, parsed.item_id, parsed.student_id)
        elif parsed.command == "claims":
            return cmd_claims(config)
        elif parsed.command == "status":
            return cmd_status(config)
        elif parsed.command == "export":
            return cmd_export(config, parsed.output)
        elif parsed.command == "import":
            return cmd_import(config, parsed.file)
        else:
            parser.print_help()
            return 1
    except (MediaError, OSError, sqlite3.Error) as e:
        logger.exception(f"Command '{parsed.command}' failed")
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
