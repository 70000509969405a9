"""Command-line entry points.

Each command takes no flags. Commands that talk to Cloudinary accept one
optional positional argument, the cloud name, overriding
CLOUDINARY_CLOUD_NAME.
"""

import logging
import sys
import time
from collections.abc import Callable
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from cloudfolio import config
from cloudfolio.client import CloudinaryClient
from cloudfolio.config import CloudConfig
from cloudfolio.errors import CloudfolioError, TransportError
from cloudfolio.lister import collect_portfolio, iter_assets
from cloudfolio.metadata import build_document, load_metadata, write_metadata
from cloudfolio.pages import render_category_pages
from cloudfolio.report import format_kb, format_mb, group_by_folder, verify_site
from cloudfolio.upload import UPLOAD_FOLDERS, UploadStats, upload_category

RULE = "=" * 60
THIN_RULE = "-" * 60


def cloud_arg(argv: list[str] | None) -> str | None:
    args = sys.argv[1:] if argv is None else argv
    return args[0] if args else None


def run_command(command: Callable[[], int]) -> int:
    """Shared setup and error reporting for every entry point."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        return command()
    except CloudfolioError as e:
        print(f"\nFailed: {e}", file=sys.stderr)
        return 1


# ---------------------------------------------------------------------------
# Metadata + pages
# ---------------------------------------------------------------------------

def generate_metadata(client: CloudinaryClient, source_folder: str,
                      output_path: Path = config.METADATA_PATH,
                      simple_path: Path = config.SIMPLE_METADATA_PATH) -> bool:
    """List, categorize and write the metadata files. False if nothing was found."""
    where = f'"{source_folder}"' if source_folder else "the whole account"
    print(f"  Looking for images in {where}...")
    found = collect_portfolio(client, source_folder)
    if found is None:
        print(f"  Could not find images in any spelling of {where}.")
        print_root_folders(client)
        return False

    folder, records = found
    print(f"  Found {len(records)} images" + (f' in "{folder}"' if folder else ""))
    document = build_document(records, client.config.cloud_name, source_folder=folder)
    write_metadata(document, output_path, simple_path)
    print(f"  Wrote {output_path} and {simple_path}")
    print("  Category breakdown:")
    for category, count in sorted(document.categories.items()):
        print(f"    {category:<20} {count} images")
    return True


def generate_pages(metadata_path: Path = config.METADATA_PATH, site_dir: Path = config.SITE_DIR) -> dict[str, int]:
    metadata = load_metadata(metadata_path)
    written = render_category_pages(metadata, site_dir)
    for category, count in written.items():
        print(f"  Wrote {category}.html ({count} images)")
    print(f"  Wrote gallery.html ({len(written)} categories)")
    return written


def metadata_main(argv: list[str] | None = None) -> int:
    def command():
        cfg = CloudConfig.from_env(cloud_name=cloud_arg(argv))
        with CloudinaryClient(cfg) as client:
            print("Generating image metadata...")
            ok = generate_metadata(client, config.source_folder_from_env())
        if ok:
            print("\nDone! Now run: cloudfolio-pages")
        return 0 if ok else 1
    return run_command(command)


def pages_main(argv: list[str] | None = None) -> int:
    def command():
        print("Generating category gallery pages...")
        written = generate_pages()
        print(f"\nDone! Generated {len(written)} category pages in {config.SITE_DIR}/")
        return 0
    return run_command(command)


# ---------------------------------------------------------------------------
# Account inspection
# ---------------------------------------------------------------------------

def print_root_folders(client: CloudinaryClient):
    """List root folders and their subfolders; subfolder errors are skipped."""
    folders = client.root_folders()
    if not folders:
        print("  No folders found in Cloudinary")
        return
    print("  Available root folders:")
    for folder in folders:
        print(f"    {folder.name}/")
        try:
            subfolders = client.sub_folders(folder.path)
        except TransportError:
            continue
        for sub in subfolders:
            print(f"      - {sub.name}")


def check_main(argv: list[str] | None = None) -> int:
    def command():
        cfg = CloudConfig.from_env(cloud_name=cloud_arg(argv))
        print("Testing Cloudinary connection...")
        for label, value in cfg.describe().items():
            print(f"  {label}: {value}")

        with CloudinaryClient(cfg) as client:
            usage = client.usage()
            print("\nConnection successful.")
            print(THIN_RULE)
            print(f"  Plan: {usage.plan}")
            print(f"  Credits Used: {usage.credits_used} / {usage.credits_limit}")
            print(f"  Storage Used: {format_mb(usage.storage_bytes)}")
            print(f"  Bandwidth Used: {format_mb(usage.bandwidth_bytes)}")
            print(f"  Resources: {usage.resources} files")
            print(THIN_RULE)

            print("\nFolders:")
            print_root_folders(client)

            print("\nResources (first 30):")
            page = client.resources_page(max_results=30)
            if not page.resources:
                print("  No images found in Cloudinary")
            for i, r in enumerate(page.resources, 1):
                print(f"  {i}. {r.folder or 'root'}/ {r.filename}")
                print(f"     Size: {format_kb(r.bytes)} | Format: {r.format} | {r.width}x{r.height}px")

        print(f"\n{RULE}\nConnection test complete.")
        return 0
    return run_command(command)


def folders_main(argv: list[str] | None = None) -> int:
    def command():
        cfg = CloudConfig.from_env(cloud_name=cloud_arg(argv))
        with CloudinaryClient(cfg) as client:
            records = list(iter_assets(client))

        folders = group_by_folder(records)
        print(f"\nCLOUDINARY FOLDER STRUCTURE\n{RULE}")
        for folder, images in folders.items():
            total = sum(r.bytes for r in images)
            print(f"\n{folder + '/' if folder else 'Root Directory'} ({len(images)} images)")
            print(f"  Total Size: {format_mb(total)} | Avg: {format_kb(total // len(images))}")
            for r in images[:5]:
                print(f"  - {r.filename} ({format_kb(r.bytes)}, {r.width}x{r.height}px)")
            if len(images) > 5:
                print(f"  ... and {len(images) - 5} more images")

        print(f"\n{RULE}")
        print(f"Total Folders: {len(folders)}")
        print(f"Total Images: {len(records)}")
        print(f"Total Storage: {format_mb(sum(r.bytes for r in records))}")
        return 0
    return run_command(command)


# ---------------------------------------------------------------------------
# Upload + verification
# ---------------------------------------------------------------------------

def upload_main(argv: list[str] | None = None) -> int:
    def command():
        cfg = CloudConfig.from_env(cloud_name=cloud_arg(argv))
        print(f"Starting Cloudinary upload to {cfg.cloud_name}...")
        start = time.monotonic()
        totals = UploadStats()
        with CloudinaryClient(cfg) as client:
            for category, folder in UPLOAD_FOLDERS.items():
                print(f"\nUploading {category}...")
                totals.add(upload_category(client, category, folder))

        print(f"\n{RULE}")
        print(f"Upload complete in {time.monotonic() - start:.2f} seconds")
        print(f"  Uploaded: {totals.uploaded} | Failed: {totals.failed} | Skipped: {totals.skipped}")
        return 1 if totals.failed else 0
    return run_command(command)


def verify_main(argv: list[str] | None = None) -> int:
    def command():
        report = verify_site(config.METADATA_PATH, config.SITE_DIR)
        print(f"CLOUDINARY INTEGRATION VERIFICATION\n{RULE}")
        if report.metadata_found:
            print(f"  Metadata file: {config.METADATA_PATH} ({report.total_images} images)")
            for category, count in sorted(report.categories.items()):
                print(f"    - {category}: {count} images")
        else:
            print(f"  Metadata file not found: {config.METADATA_PATH}")

        print("\nCategory pages:")
        for category, count in report.pages.items():
            if count is None:
                print(f"  {category}.html - not found")
            else:
                print(f"  {category}.html - {count} lazy-loaded images")

        print(f"\n{RULE}\n" + ("All checks passed." if report.ok else "Some checks failed."))
        return 0 if report.ok else 1
    return run_command(command)
