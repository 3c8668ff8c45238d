from __future__ import annotations

import argparse
from pathlib import Path
import sys

from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from core.errors import GalleryError
from core.services.display import DEFAULT_FILE_SRC_PREFIX, detect_platform, select_resolver
from core.services.gallery_service import GalleryManager
from core.services.interfaces import Directory
from infrastructure.blob_store import FileSystemBlobStore
from infrastructure.camera import FileCaptureSource
from infrastructure.geolocation import build_position_provider
from infrastructure.logging import find_latest_log_file, init_logging
from infrastructure.preferences import JsonPreferences
from infrastructure.settings import JsonSettings, load_gallery_config, storage_root


BASE_DIR = Path(__file__).parent


def build_gallery(settings: JsonSettings) -> GalleryManager:
    """Wire stores, capture source, and position provider from `settings`."""
    root = storage_root(settings)
    blob_store = FileSystemBlobStore(root)
    prefs_name = str(settings.get("storage.preferences_file", "preferences.json"))
    preferences = JsonPreferences(root / prefs_name)

    platform = detect_platform(settings.get("runtime.platform", "auto"))
    resolver = select_resolver(
        platform, blob_store, settings.get("native.file_src_prefix", DEFAULT_FILE_SRC_PREFIX)
    )
    logger.info("Gallery platform: {} | storage root: {}", platform.value, root)

    inbox = settings.get("camera.inbox_dir") or str(root / "inbox")
    camera = FileCaptureSource(
        inbox_dir=Path(inbox).expanduser(),
        cache_dir=blob_store.directory_path(Directory.CACHE),
        quality=int(settings.get("camera.quality", 100) or 100),
    )
    return GalleryManager(
        blob_store=blob_store,
        preferences=preferences,
        capture_source=camera,
        position_provider=build_position_provider(settings),
        resolver=resolver,
        config=load_gallery_config(settings),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Geotagged photo gallery")
    parser.add_argument(
        "command", nargs="?", default="list", choices=["list", "capture", "locations", "logs"]
    )
    parser.add_argument("--settings", default=str(BASE_DIR / "settings.json"))
    args = parser.parse_args(argv)

    try:
        settings = JsonSettings(args.settings)
    except GalleryError as ex:
        print(ex, file=sys.stderr)
        return 2

    log_dir = settings.get("logging.dir") or str(storage_root(settings) / "logs")
    log_path = init_logging(
        Path(log_dir).expanduser(), level=str(settings.get("logging.level", "INFO"))
    )
    if args.command == "logs":
        latest = find_latest_log_file(log_path)
        print(latest if latest is not None else f"No log files in {log_path}")
        return 0

    try:
        vm = GalleryVM(build_gallery(settings))
        vm.load()
    except GalleryError as ex:
        logger.error("Load saved photos failed: {}", ex)
        print(f"Cannot load gallery: {ex}", file=sys.stderr)
        return 1

    if args.command == "capture":
        item = vm.take_photo()
        if item is None:
            print(f"Capture failed: {vm.last_error}", file=sys.stderr)
            return 1
        print(f"{item.file_name}\t{item.coordinates_text or '-'}")
    elif args.command == "locations":
        print(vm.locations_text.rstrip("\n"))
    else:
        for item in vm.items:
            print(f"{item.file_name}\t{item.coordinates_text or '-'}\t{item.maps_url or ''}")
        print(f"{vm.count} photo(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
