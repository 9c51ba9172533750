from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image
from pptx import Presentation

from exporter.chapters import Chapter, ExportConfig
from exporter.pipeline import ExportError, export_chapters, screenshot_base_name

SECTION_COUNTS = {"chapter1_intro": 2, "chapter1_deploy": 3, "chapter2_wrap": 1}


class FakeServer:
    def __init__(self, root: Path, port: int = 9876, debug: bool = False):
        self.root = root
        self.port = port
        self.open = False

    def url_for(self, relative_path: str) -> str:
        return f"http://localhost:{self.port}/{relative_path}"

    def __enter__(self):
        self.open = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.open = False


class FakeCapturer:
    instances: list["FakeCapturer"] = []

    def __init__(self, config: ExportConfig, fail_on: str | None = None):
        self.config = config
        self.fail_on = fail_on
        self.urls: list[str] = []
        self.closed = False
        FakeCapturer.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    def capture(self, url: str, base_name: str, out_dir: Path) -> list[Path]:
        if self.fail_on and self.fail_on in url:
            raise RuntimeError("net::ERR_CONNECTION_REFUSED")
        self.urls.append(url)
        paths = []
        for i in range(SECTION_COUNTS[base_name]):
            path = out_dir / f"{base_name}_section{i + 1:02d}.png"
            Image.new("RGB", (192, 108), "white").save(path, format="PNG")
            paths.append(path)
        return paths


@pytest.fixture()
def config(tmp_path: Path) -> ExportConfig:
    return ExportConfig(
        slides_dir=tmp_path,
        chapters=[
            Chapter("Chapter1", "Chapter 1", ("chapter1/intro.html", "chapter1/deploy.html")),
            Chapter("Chapter2", "Chapter 2", ("chapter2/wrap.html",)),
        ],
        port=0,
    )


@pytest.fixture(autouse=True)
def _reset_capturers() -> None:
    FakeCapturer.instances.clear()


def test_export_writes_one_deck_per_chapter(config: ExportConfig) -> None:
    results = export_chapters(
        config,
        server_factory=FakeServer,
        capturer_factory=FakeCapturer,
        verbose=False,
    )
    assert [r.chapter.name for r in results] == ["Chapter1", "Chapter2"]
    assert [r.slide_count for r in results] == [5, 1]
    assert results[0].output_path == config.exports_dir / "Chapter1.pptx"
    assert len(Presentation(str(results[0].output_path)).slides) == 5
    assert len(Presentation(str(results[1].output_path)).slides) == 1

    capturer = FakeCapturer.instances[0]
    assert capturer.closed
    assert capturer.urls == [
        "http://localhost:0/chapter1/intro.html",
        "http://localhost:0/chapter1/deploy.html",
        "http://localhost:0/chapter2/wrap.html",
    ]
    assert not config.screenshots_dir.exists()


def test_screenshot_order_follows_files(config: ExportConfig) -> None:
    seen: list[list[str]] = []

    def record_deck(title, images, output_path, **_kwargs):
        seen.append([Path(p).name for p in images])
        return output_path

    export_chapters(
        config,
        server_factory=FakeServer,
        capturer_factory=FakeCapturer,
        deck_builder=record_deck,
        verbose=False,
    )
    assert seen[0] == [
        "chapter1_intro_section01.png",
        "chapter1_intro_section02.png",
        "chapter1_deploy_section01.png",
        "chapter1_deploy_section02.png",
        "chapter1_deploy_section03.png",
    ]


def test_keep_screenshots(config: ExportConfig) -> None:
    config.keep_screenshots = True
    export_chapters(
        config, server_factory=FakeServer, capturer_factory=FakeCapturer, verbose=False
    )
    assert sorted(p.name for p in config.screenshots_dir.iterdir())[:2] == [
        "chapter1_deploy_section01.png",
        "chapter1_deploy_section02.png",
    ]


def test_capture_failure_is_wrapped_and_cleaned_up(config: ExportConfig) -> None:
    with pytest.raises(ExportError, match="chapter1/deploy.html"):
        export_chapters(
            config,
            server_factory=FakeServer,
            capturer_factory=lambda cfg: FakeCapturer(cfg, fail_on="deploy"),
            verbose=False,
        )
    assert FakeCapturer.instances[0].closed
    assert not config.screenshots_dir.exists()
    assert not (config.exports_dir / "Chapter1.pptx").exists()


def test_summary_table_is_printed(config: ExportConfig, capsys: pytest.CaptureFixture[str]) -> None:
    export_chapters(config, server_factory=FakeServer, capturer_factory=FakeCapturer)
    out = capsys.readouterr().out
    assert "Export Summary" in out
    assert "Chapter1.pptx" in out


@pytest.mark.parametrize(
    "file, expected",
    [
        ("chapter1/intro.html", "chapter1_intro"),
        ("intro.html", "intro"),
        ("part1/chapter2/slide.html", "part1_chapter2_slide"),
    ],
)
def test_screenshot_base_name_flattens_folders(file: str, expected: str) -> None:
    assert screenshot_base_name(file) == expected


class PaintingCapturer(FakeCapturer):
    """Fills each screenshot with a colour chosen by the source folder."""

    COLORS = {"a": "red", "b": "blue"}

    def capture(self, url: str, base_name: str, out_dir: Path) -> list[Path]:
        folder = url.rsplit("/", 2)[-2]
        path = out_dir / f"{base_name}_section01.png"
        Image.new("RGB", (192, 108), self.COLORS[folder]).save(path, format="PNG")
        return [path]


def test_same_named_files_in_different_folders_keep_their_screenshots(
    tmp_path: Path,
) -> None:
    config = ExportConfig(
        slides_dir=tmp_path,
        chapters=[Chapter("Mixed", "Mixed", ("a/slide.html", "b/slide.html"))],
        port=0,
    )
    pixels: list[tuple[int, int, int]] = []

    def record_pixels(title, images, output_path, **_kwargs):
        for image in images:
            with Image.open(image) as img:
                pixels.append(img.convert("RGB").getpixel((0, 0)))
        return output_path

    export_chapters(
        config,
        server_factory=FakeServer,
        capturer_factory=PaintingCapturer,
        deck_builder=record_pixels,
        verbose=False,
    )
    assert pixels == [(255, 0, 0), (0, 0, 255)]


def test_deck_builder_receives_capture_size(config: ExportConfig) -> None:
    config.slide_width, config.slide_height = 1000, 1000
    sizes: list[tuple[int, int]] = []

    def record_size(title, images, output_path, *, slide_size, **_kwargs):
        sizes.append(slide_size)
        return output_path

    export_chapters(
        config,
        server_factory=FakeServer,
        capturer_factory=FakeCapturer,
        deck_builder=record_size,
        verbose=False,
    )
    assert sizes == [(1000, 1000), (1000, 1000)]
