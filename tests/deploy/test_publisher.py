import base64
import os
import zipfile

import httpx
import pytest

from config.settings import Settings
from deploy.publisher import Publisher

KUDU_API = "https://example.scm.azurewebsites.net/api/zip/site/wwwroot"


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "site"
    (root / "dialogs").mkdir(parents=True)
    (root / "index.py").write_text("print('hi')\n", encoding="utf-8")
    (root / "dialogs" / "greeting.py").write_text("GREETING = True\n", encoding="utf-8")
    return root


class RecordingTransport:
    """Answers every request with a fixed status and remembers what was sent."""

    def __init__(self, status_code=200):
        self.status_code = status_code
        self.requests = []
        self.bodies = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        return httpx.Response(self.status_code, request=request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_publisher(project, transport=None, **kwargs) -> Publisher:
    return Publisher(
        project,
        kudu_api=KUDU_API,
        username="$example",
        password="secret",
        site_name="example",
        transport=transport,
        **kwargs,
    )


def test_requires_credentials(project):
    with pytest.raises(ValueError):
        Publisher(project, kudu_api=KUDU_API, username="", password="secret")
    with pytest.raises(ValueError):
        Publisher(project, kudu_api=KUDU_API, username="$example", password="")
    with pytest.raises(ValueError):
        Publisher(project, kudu_api="", username="$example", password="secret")


def test_archive_defaults_to_sibling_of_root(project):
    publisher = make_publisher(project)

    assert publisher.zip_path == project.parent / "example.zip"


def test_zip_folder_stores_relative_paths(project):
    publisher = make_publisher(project)

    archive_path = publisher.zip_folder()

    with zipfile.ZipFile(archive_path) as archive:
        assert sorted(archive.namelist()) == ["dialogs/greeting.py", "index.py"]
        assert archive.read("index.py") == b"print('hi')\n"


def test_zip_folder_skips_archive_inside_root(project):
    publisher = make_publisher(project, zip_path=project / "bundle.zip")

    publisher.zip_folder()

    with zipfile.ZipFile(publisher.zip_path) as archive:
        assert "bundle.zip" not in archive.namelist()


def test_successful_upload_deletes_archive(project):
    recorder = RecordingTransport(200)
    publisher = make_publisher(project, transport=recorder.transport)
    results = []

    publisher.publish(results.append)

    assert results == [None]
    assert not publisher.zip_path.exists()

    request = recorder.requests[0]
    assert request.method == "PUT"
    assert str(request.url) == KUDU_API
    assert request.headers["Content-Type"] == "application/zip"
    expected_auth = base64.b64encode(b"$example:secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected_auth}"
    assert int(request.headers["Content-Length"]) == len(recorder.bodies[0])
    assert recorder.bodies[0][:2] == b"PK"


def test_not_found_keeps_archive_and_reports_response(project):
    recorder = RecordingTransport(404)
    publisher = make_publisher(project, transport=recorder.transport)
    results = []

    publisher.publish(results.append)

    assert publisher.zip_path.exists()
    assert len(results) == 1
    assert isinstance(results[0], httpx.Response)
    assert results[0].status_code == 404


def test_transport_error_keeps_archive_and_reports_exception(project):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    publisher = make_publisher(project, transport=httpx.MockTransport(refuse))
    results = []

    publisher.publish(results.append)

    assert publisher.zip_path.exists()
    assert isinstance(results[0], httpx.ConnectError)


def test_unexpected_status_is_reported_and_archive_kept(project):
    recorder = RecordingTransport(302)
    publisher = make_publisher(project, transport=recorder.transport)
    results = []

    publisher.publish(results.append)

    assert publisher.zip_path.exists()
    assert results[0].status_code == 302


def test_zip_failure_skips_upload(tmp_path):
    recorder = RecordingTransport(200)
    root = tmp_path / "site"
    root.mkdir()
    publisher = make_publisher(root, transport=recorder.transport, zip_path=tmp_path / "missing" / "out.zip")
    results = []

    publisher.publish(results.append)

    assert isinstance(results[0], OSError)
    assert recorder.requests == []


def test_default_callback_logs_outcome(project, caplog):
    publisher = make_publisher(project, transport=RecordingTransport(500).transport)

    with caplog.at_level("INFO", logger="deploy.publisher"):
        publisher.publish()

    assert "failed to publish example" in caplog.text


def test_from_settings_uses_configured_values(project):
    settings = Settings(
        publish_site_name="cheese",
        publish_kudu_api=KUDU_API,
        publish_username="$cheese",
        publish_password="pw",
        publish_content_type="applicaton/zip",
    )

    publisher = Publisher.from_settings(project, settings=settings)

    assert publisher.zip_path == project.parent / "cheese.zip"
    assert publisher.content_type == "applicaton/zip"
    assert publisher.username == "$cheese"


def test_files_dated_before_1980_are_still_archived(project):
    old_file = project / "dialogs" / "greeting.py"
    os.utime(old_file, (0, 0))
    publisher = make_publisher(project, transport=RecordingTransport(200).transport)
    results = []

    publisher.publish(results.append)

    assert results == [None]
    assert not publisher.zip_path.exists()


def test_zip_value_error_is_reported(project, monkeypatch):
    publisher = make_publisher(project, transport=RecordingTransport(200).transport)

    def broken_zip():
        raise ValueError("bad entry")

    monkeypatch.setattr(publisher, "zip_folder", broken_zip)
    results = []

    publisher.publish(results.append)

    assert isinstance(results[0], ValueError)


def test_archive_removal_failure_still_reports_success(project, monkeypatch, caplog):
    publisher = make_publisher(project, transport=RecordingTransport(200).transport)

    def locked(self, *args, **kwargs):
        raise PermissionError("archive is locked")

    monkeypatch.setattr(type(publisher.zip_path), "unlink", locked)
    results = []

    with caplog.at_level("WARNING", logger="deploy.publisher"):
        publisher.publish(results.append)

    assert results == [None]
    assert "Could not remove" in caplog.text
