"""Merkle Path - Merkle trees and inclusion paths over ordered content."""

__version__ = "0.1.0"

# Directory and file constants
MERKLE_DIR = ".merkle-path"
CONFIG_FILE = "config.json"
