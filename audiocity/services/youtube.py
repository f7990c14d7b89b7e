"""YouTube media source using yt-dlp for metadata/audio and requests for thumbnails."""

from __future__ import annotations

import re
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from urllib.parse import parse_qs, urlparse

import requests
import yt_dlp
from yt_dlp.utils import DownloadError
from loguru import logger

from audiocity.domain.media import MediaInfo, MediaSourceError

VIDEO_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{11}")
_WATCH_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com", "gaming.youtube.com"}
_SHORT_HOSTS = {"youtu.be"}
_PATH_PREFIXES = ("/embed/", "/v/", "/shorts/", "/live/")


def extract_video_id(reference: str) -> str | None:
    """Return the 11-character video ID of a YouTube URL, or None."""
    try:
        parsed = urlparse((reference or "").strip())
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https"):
        return None
    host = (parsed.hostname or "").lower()
    candidate = ""
    if host in _SHORT_HOSTS:
        candidate = parsed.path.lstrip("/").split("/")[0]
    elif host in _WATCH_HOSTS or host.endswith("youtube-nocookie.com"):
        if parsed.path == "/watch":
            candidate = (parse_qs(parsed.query).get("v") or [""])[0]
        else:
            for prefix in _PATH_PREFIXES:
                if parsed.path.startswith(prefix):
                    candidate = parsed.path[len(prefix):].split("/")[0]
                    break
    if VIDEO_ID_PATTERN.fullmatch(candidate):
        return candidate
    return None


class YouTubeMediaSource:
    """Resolves YouTube URLs and downloads audio/thumbnails on a worker pool."""

    def __init__(self, max_workers: int = 2, timeout: float = 30.0) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="media-fetch")
        self.timeout = timeout

    def is_valid(self, reference: str) -> bool:
        return extract_video_id(reference) is not None

    def resolve(self, reference: str) -> MediaInfo:
        ydl_opts = {"quiet": True, "no_warnings": True, "noplaylist": True, "skip_download": True}
        try:
            with yt_dlp.YoutubeDL(ydl_opts) as ydl:
                info = ydl.extract_info(reference, download=False)
        except DownloadError as exc:
            raise MediaSourceError(f"Could not resolve {reference}: {exc}") from exc
        if not info:
            raise MediaSourceError(f"No metadata for {reference}")
        thumbnail = info.get("thumbnail") or ""
        if not thumbnail and info.get("thumbnails"):
            thumbnail = info["thumbnails"][0].get("url", "")
        return MediaInfo(
            title=info.get("title") or "",
            author=info.get("channel") or info.get("uploader") or "",
            description=info.get("description") or "",
            thumbnail_url=thumbnail,
        )

    def fetch(self, reference: str, info: MediaInfo, media_path: Path, thumbnail_path: Path) -> Future:
        future = self._executor.submit(self._transfer, reference, info, media_path, thumbnail_path)
        future.add_done_callback(lambda f: self._report(f, reference))
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    # -------------------------------------- transfers --------------------------------------
    def _transfer(self, reference: str, info: MediaInfo, media_path: Path, thumbnail_path: Path) -> None:
        self._download_audio(reference, media_path)
        if info.thumbnail_url:
            self._download_thumbnail(info.thumbnail_url, thumbnail_path)

    def _download_audio(self, reference: str, media_path: Path) -> None:
        ydl_opts = {
            "format": "bestaudio/best",
            # outtmpl is a template; literal '%' in titles must be escaped
            "outtmpl": str(media_path).replace("%", "%%"),
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
            "overwrites": True,
        }
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            ydl.download([reference])
        logger.debug(f"Audio written to {media_path}")

    def _download_thumbnail(self, url: str, thumbnail_path: Path) -> None:
        with requests.get(url, stream=True, timeout=self.timeout) as response:
            response.raise_for_status()
            with thumbnail_path.open("wb") as f:
                for chunk in response.iter_content(chunk_size=64 * 1024):
                    f.write(chunk)
        logger.debug(f"Thumbnail written to {thumbnail_path}")

    @staticmethod
    def _report(future: Future, reference: str) -> None:
        exc = future.exception()
        if exc is not None:
            logger.opt(exception=exc).error(f"Media transfer failed for {reference}")
