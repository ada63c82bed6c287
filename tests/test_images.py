import pytest
import requests

from notion_blog.assets import images as images_module
from notion_blog.assets.images import ImageDownloadError, ImageStore, image_filename


class FakeResponse:
    def __init__(self, chunks, status_error=None):
        self.chunks = chunks
        self.status_error = status_error

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error

    def iter_content(self, chunk_size=8192):
        yield from self.chunks


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response=None, error=None):
        def get(url, **kwargs):
            calls.append(url)
            if error:
                raise error
            return response
        monkeypatch.setattr(images_module.requests, "get", get)
        return calls

    return install


def test_image_filename_uses_host_and_last_segment():
    assert image_filename("https://images.example.com/a/b/cat.png?width=100") == "images.example.com_cat.png"


def test_image_filename_rejects_malformed_url():
    with pytest.raises(ImageDownloadError) as excinfo:
        image_filename("not a url")

    assert excinfo.value.path == ""


def test_fetch_stores_image(tmp_path, fake_get):
    calls = fake_get(FakeResponse([b"abc", b"def"]))
    store = ImageStore(tmp_path / "static" / "images", "/images")

    link = store.fetch("https://example.com/pics/cat.png")

    assert link == "/images/example.com_cat.png"
    assert (tmp_path / "static" / "images" / "example.com_cat.png").read_bytes() == b"abcdef"
    assert calls == ["https://example.com/pics/cat.png"]


def test_fetch_downloads_each_url_once(tmp_path, fake_get):
    calls = fake_get(FakeResponse([b"x"]))
    store = ImageStore(tmp_path, "/images")

    store.fetch("https://example.com/cat.png")
    store.fetch("https://example.com/cat.png")

    assert len(calls) == 1


def test_fetch_network_failure(tmp_path, fake_get):
    fake_get(error=requests.ConnectionError("unreachable"))
    store = ImageStore(tmp_path, "/images")

    with pytest.raises(ImageDownloadError) as excinfo:
        store.fetch("https://example.com/cat.png")

    assert "couldn't download image" in str(excinfo.value)
    assert excinfo.value.path == ""


def test_fetch_http_error(tmp_path, fake_get):
    fake_get(FakeResponse([], status_error=requests.HTTPError("404 Client Error")))
    store = ImageStore(tmp_path, "/images")

    with pytest.raises(ImageDownloadError):
        store.fetch("https://example.com/missing.png")

    assert not (tmp_path / "example.com_missing.png").exists()


def test_fetch_folder_creation_failure(tmp_path, fake_get):
    fake_get(FakeResponse([b"x"]))
    blocker = tmp_path / "images"
    blocker.write_text("not a directory")
    store = ImageStore(blocker / "nested", "/images")

    with pytest.raises(ImageDownloadError) as excinfo:
        store.fetch("https://example.com/cat.png")

    assert "couldn't create images folder" in str(excinfo.value)


def test_image_filename_rejects_unparseable_url():
    with pytest.raises(ImageDownloadError) as excinfo:
        image_filename("http://[::1/a.png")

    assert "malformed url" in str(excinfo.value)
    assert excinfo.value.path == ""


def test_fetch_file_open_failure_returns_file_name(tmp_path, fake_get):
    fake_get(FakeResponse([b"x"]))
    (tmp_path / "example.com_cat.png").mkdir()
    store = ImageStore(tmp_path, "/images")

    with pytest.raises(ImageDownloadError) as excinfo:
        store.fetch("https://example.com/cat.png")

    assert "couldn't create image file" in str(excinfo.value)
    assert excinfo.value.path == "example.com_cat.png"


class BrokenStream(FakeResponse):
    def iter_content(self, chunk_size=8192):
        yield b"partial"
        raise requests.ConnectionError("connection reset")


def test_fetch_stream_failure_returns_link(tmp_path, fake_get):
    fake_get(BrokenStream([]))
    store = ImageStore(tmp_path, "/images")

    with pytest.raises(ImageDownloadError) as excinfo:
        store.fetch("https://example.com/cat.png")

    assert "couldn't write image file" in str(excinfo.value)
    assert excinfo.value.path == "/images/example.com_cat.png"
