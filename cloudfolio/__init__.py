"""Cloudfolio: manage a Cloudinary-hosted photo portfolio and build its gallery pages."""

__version__ = "0.1.0"
