import ctypes
import logging
import os
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

SPI_SETDESKWALLPAPER = 20
SPIF_UPDATEINIFILE = 0x01
SPIF_SENDWININICHANGE = 0x02

GNOME_KEYS = ("picture-uri", "picture-uri-dark")


class WallpaperError(RuntimeError):
    pass


def _run(cmd):
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise WallpaperError(f"{cmd[0]} not found, cannot set wallpaper") from e
    except subprocess.CalledProcessError as e:
        raise WallpaperError(f"{cmd[0]} failed with return code {e.returncode}: {e.stderr.strip()}") from e


def _set_windows(path):
    ok = ctypes.windll.user32.SystemParametersInfoW(
        SPI_SETDESKWALLPAPER, 0, path, SPIF_UPDATEINIFILE | SPIF_SENDWININICHANGE
    )
    if not ok:
        raise WallpaperError(f"SystemParametersInfoW refused {path}")


def _set_macos(path):
    quoted = path.replace("\\", "\\\\").replace('"', '\\"')
    script = f'tell application "System Events" to tell every desktop to set picture to "{quoted}"'
    _run(["osascript", "-e", script])


def _set_gnome(path):
    uri = Path(path).as_uri()
    for key in GNOME_KEYS:
        _run(["gsettings", "set", "org.gnome.desktop.background", key, uri])


def set_wallpaper(path, platform=None):
    """Set the image at *path* as the desktop background."""
    path = os.path.abspath(path)
    if not os.path.exists(path):
        raise WallpaperError(f"Wallpaper image not found: {path}")

    platform = platform or sys.platform
    if platform.startswith("win"):
        _set_windows(path)
    elif platform == "darwin":
        _set_macos(path)
    elif platform.startswith("linux"):
        _set_gnome(path)
    else:
        raise WallpaperError(f"Setting the wallpaper is not supported on {platform}")
    logger.info(f"Wallpaper set to {path}")
