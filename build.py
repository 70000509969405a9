# /// script
# dependencies = ["pillow", "jinja2", "httpx", "python-dotenv"]
# ///
"""
Cloudfolio: rebuild the portfolio gallery from what is on Cloudinary.

Usage:
    uv run --script build.py [cloud_name]

Reads CLOUDINARY_CLOUD_NAME / CLOUDINARY_API_KEY / CLOUDINARY_API_SECRET from
the environment or ./.env. Writes public/data/*.json and the category pages
under ./public/
"""

import sys

from cloudfolio import config
from cloudfolio.cli import cloud_arg, run_command, generate_metadata, generate_pages
from cloudfolio.client import CloudinaryClient
from cloudfolio.config import CloudConfig


def main(argv: list[str] | None = None) -> int:
    def command():
        cfg = CloudConfig.from_env(cloud_name=cloud_arg(argv))

        print("Step 1: Listing and categorizing images...")
        with CloudinaryClient(cfg) as client:
            if not generate_metadata(client, config.source_folder_from_env()):
                return 1

        print("Step 2: Generating HTML...")
        written = generate_pages()

        print(f"\nDone! {len(written)} category pages written to {config.SITE_DIR}/")
        print(f"Run: python3 -m http.server -d {config.SITE_DIR} 8000")
        return 0
    return run_command(command)


if __name__ == "__main__":
    sys.exit(main())
