"""Kindle device detection utilities.

Finds mounted volumes that look like a Kindle, i.e. that contain
``documents/My Clippings.txt``, on macOS, Windows and Linux. The returned
paths are the volume roots, which is what the highlight loader expects.
"""

import logging
import os
import platform
import subprocess
from pathlib import Path

from ..parser.loader import CLIPPINGS_RELATIVE_PATH

logger = logging.getLogger(__name__)

KINDLE_IDENTIFIERS = ["Kindle", "kindle", "KINDLE"]

MACOS_VOLUMES_DIR = Path("/Volumes")


def detect_kindle_devices() -> list[tuple[str, Path]]:
    """Detect connected Kindle devices across platforms.

    Returns:
        List of tuples containing (device_name, base_path)
    """
    system = platform.system()
    logger.debug("Detecting Kindle devices on %s platform", system)

    if system == "Darwin":
        return _detect_kindle_macos()
    if system == "Windows":
        return _detect_kindle_windows()
    if system == "Linux":
        return _detect_kindle_linux()
    logger.warning("Unsupported operating system for Kindle detection: %s", system)
    return []


def _has_clippings(base_path: Path) -> bool:
    return (base_path / CLIPPINGS_RELATIVE_PATH).is_file()


def _is_kindle_name(name: str) -> bool:
    return any(kindle_id in name for kindle_id in KINDLE_IDENTIFIERS)


def _detect_kindle_macos() -> list[tuple[str, Path]]:
    devices = []

    volumes_dir = MACOS_VOLUMES_DIR
    if not volumes_dir.exists():
        logger.debug("/Volumes directory not found on macOS")
        return devices

    for volume in volumes_dir.iterdir():
        if volume.is_dir() and _has_clippings(volume):
            label = "Found Kindle device" if _is_kindle_name(volume.name) else "Found probable Kindle device"
            logger.info("%s: %s", label, volume)
            devices.append((volume.name, volume))

    return devices


def _detect_kindle_windows() -> list[tuple[str, Path]]:
    import ctypes
    import string

    devices = []
    bitmask = ctypes.windll.kernel32.GetLogicalDrives() if hasattr(ctypes, "windll") else 0

    for letter in string.ascii_uppercase:
        if not (bitmask & (1 << (ord(letter) - ord("A")))):
            continue

        drive_path = Path(f"{letter}:\\")
        if not drive_path.exists() or not _has_clippings(drive_path):
            continue

        try:
            volume_info = subprocess.check_output(["cmd", "/c", f"vol {letter}:"], stderr=subprocess.STDOUT, text=True)
            volume_name = volume_info.strip().split("\n")[0].split(" ")[-1]
        except (subprocess.SubprocessError, IndexError) as e:
            logger.debug("Error getting volume info for drive %s: %s", letter, e)
            volume_name = ""

        device_name = volume_name if _is_kindle_name(volume_name) else f"Drive {letter}"
        logger.info("Found Kindle device %s at %s", device_name, drive_path)
        devices.append((device_name, drive_path))

    return devices


def _linux_mount_points() -> list[Path]:
    mount_points = [Path("/media"), Path("/mnt")]
    user = os.getenv("USER", "")
    if user:
        mount_points += [Path("/media") / user, Path("/run/media") / user]
    return mount_points


def _detect_kindle_linux() -> list[tuple[str, Path]]:
    devices = []

    seen = set()
    for mount_point in _linux_mount_points():
        if not mount_point.is_dir():
            continue

        for device_dir in mount_point.iterdir():
            if not device_dir.is_dir() or device_dir in seen:
                continue
            seen.add(device_dir)

            if _has_clippings(device_dir):
                logger.info("Found Kindle device: %s at %s", device_dir.name, device_dir)
                devices.append((device_dir.name, device_dir))

    return devices


def find_kindle_base_path() -> Path | None:
    """Find the base path of a connected Kindle device.

    Returns:
        Base path of the first detected device, or None if none is connected
    """
    kindle_devices = detect_kindle_devices()
    if not kindle_devices:
        logger.debug("No Kindle devices detected")
        return None

    device_name, base_path = kindle_devices[0]
    logger.info("Using Kindle device %s at %s", device_name, base_path)
    return base_path


def format_device_list(devices: list[tuple[str, Path]]) -> str:
    """Format the list of detected devices for display.

    Args:
        devices: List of tuples containing (device_name, base_path)

    Returns:
        Formatted string for display
    """
    if not devices:
        return "No Kindle devices detected."

    lines = [f"Detected {len(devices)} Kindle device(s):"]
    lines.append("------------------------------------")

    for i, (device_name, base_path) in enumerate(devices, 1):
        lines.append(f"{i}. {device_name}")
        lines.append(f"   Base path: {base_path}")
        lines.append(f"   Clippings file: {base_path / CLIPPINGS_RELATIVE_PATH}")
        lines.append("")

    lines.append("To read a specific device, run:")
    lines.append("  readly highlights list --base-path BASE_PATH")

    return "\n".join(lines)
