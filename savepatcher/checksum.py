"""
MD5 checksums guarding regions of an Elden Ring save file.

Each checksummed region is preceded by a 16-byte field holding the raw MD5
digest of the region's bytes.
"""

import hashlib

from savepatcher.model.section import Buffer, Section


def digest(data: Buffer) -> bytes:
    """Return the 16-byte MD5 digest of data."""
    return hashlib.md5(data).digest()


def format_hex(data: Buffer) -> str:
    """Format raw bytes as a lowercase hex string."""
    return bytes(data).hex()


def section_digest(section: Section, data: Buffer) -> bytes:
    """Digest of the bytes covered by section."""
    return digest(section.bytes_from(data))


def verify_section(checksum_section: Section, section: Section, data: Buffer) -> bool:
    """
    Verify the checksum stored for a section.

    Args:
        checksum_section: Section holding the stored digest
        section: Section the digest is computed over
        data: Save buffer

    Returns:
        True if the stored digest matches the computed one
    """
    return checksum_section.bytes_from(data) == section_digest(section, data)
