import logging
import zipfile
from functools import partial
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

import httpx

from config.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

PublishResult = Optional[Union[httpx.Response, Exception]]
PublishCallback = Callable[[PublishResult], None]


class Publisher:
    """
    Zips a project folder and uploads it to a Kudu zip-deploy endpoint.

    Each call to `publish` makes exactly one attempt: compress, then a single
    streamed PUT. The local archive is removed only after a 2xx response; on
    any failure it stays on disk for inspection.

    The outcome is reported to a callback that receives:
        - None on success
        - the httpx.Response when the server answered with an error status
        - the raised exception when zipping or the transport failed
    """

    def __init__(
        self,
        root_folder: Union[str, Path],
        kudu_api: str,
        username: str,
        password: str,
        *,
        site_name: str = "site",
        zip_path: Optional[Union[str, Path]] = None,
        content_type: str = "application/zip",
        chunk_size: int = 64 * 1024,
        timeout: float = 120.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not kudu_api:
            raise ValueError("Missing parameter. kudu_api is required")
        if not username or not password:
            raise ValueError("Missing publish credentials. username and password are required")

        self.root_folder = Path(root_folder).resolve()
        self.kudu_api = kudu_api
        self.username = username
        self.password = password
        self.site_name = site_name
        self.zip_path = Path(zip_path).resolve() if zip_path else self.root_folder.parent / f"{site_name}.zip"
        self.content_type = content_type
        self.chunk_size = chunk_size
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, root_folder: Union[str, Path] = ".", settings: Optional[Settings] = None,
                      **kwargs) -> "Publisher":
        settings = settings or default_settings
        return cls(
            root_folder,
            kudu_api=settings.publish_kudu_api,
            username=settings.publish_username,
            password=settings.publish_password,
            site_name=settings.publish_site_name,
            zip_path=settings.publish_zip_path,
            content_type=settings.publish_content_type,
            **kwargs,
        )

    def publish(self, callback: Optional[PublishCallback] = None) -> None:
        callback = callback or self.report
        try:
            self.zip_folder()
        except (OSError, ValueError, zipfile.LargeZipFile) as exc:
            logger.error(f"Could not create archive {self.zip_path}: {exc}")
            callback(exc)
            return
        self.upload_zip(callback)

    def zip_folder(self) -> Path:
        """Compress every file below the root folder into the archive, using paths relative to the root."""
        logger.info(f"Zipping {self.root_folder} into {self.zip_path}")
        file_count = 0
        with zipfile.ZipFile(self.zip_path, "w", compression=zipfile.ZIP_DEFLATED,
                             strict_timestamps=False) as archive:
            for path in sorted(self.root_folder.rglob("*")):
                if not path.is_file() or path == self.zip_path:
                    continue
                archive.write(path, path.relative_to(self.root_folder).as_posix())
                file_count += 1
        logger.info(f"Archived {file_count} files ({self.zip_path.stat().st_size} bytes)")
        return self.zip_path

    def upload_zip(self, callback: PublishCallback) -> None:
        headers = {
            "Content-Type": self.content_type,
            "Content-Length": str(self.zip_path.stat().st_size),
        }
        logger.info(f"Uploading {self.zip_path.name} to {self.kudu_api}")
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.put(
                    self.kudu_api,
                    content=self._iter_archive(),
                    headers=headers,
                    auth=(self.username, self.password),
                )
        except (httpx.HTTPError, OSError) as exc:
            logger.error(f"Upload to {self.kudu_api} failed: {exc}")
            callback(exc)
            return

        if response.is_success:
            logger.info(f"Upload accepted with status {response.status_code}")
            try:
                self.zip_path.unlink()
            except OSError as exc:
                logger.warning(f"Could not remove {self.zip_path}: {exc}")
            callback(None)
        elif response.status_code >= 400:
            logger.error(f"Upload rejected with status {response.status_code}")
            callback(response)
        else:
            logger.warning(f"Unexpected status {response.status_code}, keeping {self.zip_path}")
            callback(response)

    def report(self, error: PublishResult) -> None:
        if error is None:
            logger.info(f"{self.site_name} publish")
        else:
            logger.error(f"failed to publish {self.site_name}: {error!r}")

    def _iter_archive(self) -> Iterator[bytes]:
        with self.zip_path.open("rb") as archive:
            for chunk in iter(partial(archive.read, self.chunk_size), b""):
                yield chunk
